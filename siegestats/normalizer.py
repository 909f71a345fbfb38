"""
Stats normalization.
Strict mapping layer that converts raw r6data responses into the stable
player payload the frontend renders. Pure functions, no I/O.

Upstream documents are loosely shaped: boards, seasons and playlists may be
missing or renamed between API versions. Every lookup here tolerates that and
falls back to zero/blank values instead of raising.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from siegestats.ranks import rank_name_from_id
from siegestats.utils.helpers import Number, dig, first_present, round_half_up, slugify, to_number

# Shown for MMR values the provider did not send
MISSING = "-"

# Banner operator for players without operator data. Picked from the username
# so the same player always gets the same one.
FALLBACK_OPERATORS = [
    "sledge",
    "ash",
    "jager",
    "thermite",
    "mute",
    "hibana",
    "smoke",
    "iq",
]

OPERATOR_PLAYLISTS = ("ranked", "unranked", "casual")
TOP_OPERATORS_LIMIT = 10

# Season label candidates, in upstream schema-version priority order
SEASON_ID_ACCESSORS = (
    lambda fp: fp.get("seasonYear"),
    lambda fp: fp.get("season_year"),
    lambda fp: fp.get("season"),
    lambda fp: fp.get("season_id"),
    lambda fp: fp.get("seasonId"),
    lambda fp: dig(fp, "metadata", "season"),
)

OPERATOR_NAME_ACCESSORS = (
    lambda op: op.get("operator"),
    lambda op: op.get("name"),
)


# =============================================================================
# PAYLOAD CONTRACTS
# =============================================================================


@dataclass
class TopOperator:
    """Banner operator shown on the profile header."""
    slug: str
    name: str

    @property
    def image_url(self) -> str:
        return operator_image_url(self.slug)

    def to_dict(self) -> Dict[str, Any]:
        return {"slug": self.slug, "name": self.name, "imageUrl": self.image_url}


@dataclass
class OperatorUsage:
    """Lifetime round counts for one operator."""
    name: str
    played: Number = 0
    won: Number = 0
    win_rate: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "played": self.played,
            "won": self.won,
            "winRate": self.win_rate,
        }


@dataclass
class MatchTotals:
    """Outcome counts plus kills/deaths for one board or season."""
    wins: Number = 0
    losses: Number = 0
    abandons: Number = 0
    kills: Number = 0
    deaths: Number = 0

    @property
    def matches(self) -> Number:
        # Abandons count as played matches but are not reported on their own
        return self.wins + self.losses + self.abandons

    @property
    def kd(self) -> Number:
        return compute_kd(self.kills, self.deaths)

    @property
    def win_rate(self) -> Number:
        return compute_win_rate(self.wins, self.matches)


@dataclass
class RankedStats:
    """Current ranked season snapshot."""
    totals: MatchTotals = field(default_factory=MatchTotals)
    current_rank: str = rank_name_from_id(0)
    mmr: Any = MISSING
    peak_rank: str = rank_name_from_id(0)
    peak_mmr: Any = MISSING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentRank": self.current_rank,
            "mmr": self.mmr,
            "kd": self.totals.kd,
            "winRate": self.totals.win_rate,
            "matches": self.totals.matches,
            "wins": self.totals.wins,
            "losses": self.totals.losses,
            "kills": self.totals.kills,
            "deaths": self.totals.deaths,
            "peakRank": self.peak_rank,
            "peakMmr": self.peak_mmr,
        }


@dataclass
class UnrankedStats:
    """Standard (or living game mode) board snapshot."""
    totals: MatchTotals = field(default_factory=MatchTotals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": self.totals.matches,
            "wins": self.totals.wins,
            "losses": self.totals.losses,
            "kd": self.totals.kd,
            "winRate": self.totals.win_rate,
            "kills": self.totals.kills,
            "deaths": self.totals.deaths,
        }


@dataclass
class RankedSeason:
    """One entry of the ranked history."""
    season: Any
    totals: MatchTotals
    peak_rank: str
    peak_mmr: Any
    rank: str
    mmr: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            "season": self.season,
            "matches": self.totals.matches,
            "wins": self.totals.wins,
            "losses": self.totals.losses,
            "peakRank": self.peak_rank,
            "peakMmr": self.peak_mmr,
            "rank": self.rank,
            "mmr": self.mmr,
        }


@dataclass
class PlayerStatsPayload:
    """
    Stable payload for the player profile page.
    UI relies on these exact field names.
    """
    platform: str
    username: str
    top_operator: TopOperator
    top_operators: List[OperatorUsage] = field(default_factory=list)
    ranked: RankedStats = field(default_factory=RankedStats)
    unranked: UnrankedStats = field(default_factory=UnrankedStats)
    ranked_seasons: List[RankedSeason] = field(default_factory=list)
    # Which operatorStats playlist the ranking came from (debug only)
    operators_playlist: str = "none"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "platform": self.platform,
            "username": self.username,
            "topOperator": self.top_operator.to_dict(),
            "topOperators": [op.to_dict() for op in self.top_operators],
            "operators": [],
            "stats": {
                "ranked": self.ranked.to_dict(),
                "unranked": self.unranked.to_dict(),
                "rankedSeasons": [s.to_dict() for s in self.ranked_seasons],
            },
        }


# =============================================================================
# ARITHMETIC
# =============================================================================


def compute_kd(kills: Number, deaths: Number) -> Number:
    """Kills per death to 2 decimals; with no deaths the K/D is the kill count."""
    if deaths > 0:
        return round_half_up(kills / deaths, 2)
    return kills if kills > 0 else 0


def compute_win_rate(wins: Number, matches: Number) -> Number:
    """Win percentage to 1 decimal, 0 when nothing was played."""
    if matches > 0:
        return round_half_up(wins / matches * 100, 1)
    return 0


def operator_image_url(slug: str) -> str:
    return f"/assets/operators/{slug}.jpg"


def fallback_operator_slug(username: str) -> str:
    """Deterministic banner operator: sum of character codes modulo the list."""
    index = abs(sum(ord(c) for c in username)) % len(FALLBACK_OPERATORS)
    return FALLBACK_OPERATORS[index]


# =============================================================================
# BOARDS AND SEASONS
# =============================================================================


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def find_board(stats_doc: Any, board_id: str) -> Optional[Dict[str, Any]]:
    """Locate a board by id inside the first platform family profile."""
    families = _as_list(dig(stats_doc, "platform_families_full_profiles"))
    family = _as_dict(families[0]) if families else {}
    for board in _as_list(family.get("board_ids_full_profiles")):
        if isinstance(board, dict) and board.get("board_id") == board_id:
            return board
    return None


def select_boards(stats_doc: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
    """
    Returns:
        (ranked_board, standard_board); standard falls back to the
        living game mode board. Either may be None.
    """
    ranked = find_board(stats_doc, "ranked")
    standard = find_board(stats_doc, "standard") or find_board(stats_doc, "living_game_mode")
    return ranked, standard


def _full_profiles(board: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [_as_dict(fp) for fp in _as_list(_as_dict(board).get("full_profiles"))]


def _match_totals(full_profile: Dict[str, Any]) -> MatchTotals:
    season_stats = _as_dict(full_profile.get("season_statistics"))
    outcomes = _as_dict(season_stats.get("match_outcomes"))
    return MatchTotals(
        wins=to_number(outcomes.get("wins")),
        losses=to_number(outcomes.get("losses")),
        abandons=to_number(outcomes.get("abandons")),
        kills=to_number(season_stats.get("kills")),
        deaths=to_number(season_stats.get("deaths")),
    )


def _mmr(value: Any) -> Any:
    return MISSING if value is None else value


def extract_ranked(board: Optional[Dict[str, Any]]) -> RankedStats:
    """Current season = first full profile on the ranked board."""
    profiles = _full_profiles(board)
    if not profiles:
        return RankedStats()

    current = profiles[0]
    profile = _as_dict(current.get("profile"))
    return RankedStats(
        totals=_match_totals(current),
        current_rank=rank_name_from_id(to_number(profile.get("rank"))),
        mmr=_mmr(profile.get("rank_points")),
        peak_rank=rank_name_from_id(to_number(profile.get("max_rank"))),
        peak_mmr=_mmr(profile.get("max_rank_points")),
    )


def extract_unranked(board: Optional[Dict[str, Any]]) -> UnrankedStats:
    profiles = _full_profiles(board)
    if not profiles:
        return UnrankedStats()
    return UnrankedStats(totals=_match_totals(profiles[0]))


def season_label(full_profile: Dict[str, Any], index: int) -> Any:
    return first_present(full_profile, SEASON_ID_ACCESSORS, default=f"#{index + 1}")


def extract_seasons(board: Optional[Dict[str, Any]]) -> List[RankedSeason]:
    """
    One season per full profile, in source order. Seasons without a single
    played match are dropped.
    """
    seasons = []
    for i, full_profile in enumerate(_full_profiles(board)):
        profile = _as_dict(full_profile.get("profile"))
        season = RankedSeason(
            season=season_label(full_profile, i),
            totals=_match_totals(full_profile),
            peak_rank=rank_name_from_id(to_number(profile.get("max_rank"))),
            peak_mmr=_mmr(profile.get("max_rank_points")),
            rank=rank_name_from_id(to_number(profile.get("rank"))),
            mmr=_mmr(profile.get("rank_points")),
        )
        if season.totals.matches > 0:
            seasons.append(season)
    return seasons


# =============================================================================
# OPERATORS
# =============================================================================


def select_operator_playlist(operator_doc: Any) -> Tuple[str, Union[Dict[str, Any], List[Any], None]]:
    """
    Pick the operator map from the first playlist that has one.

    Returns:
        (playlist_name, operators); ("none", None) when no playlist has data
    """
    playlists = _as_dict(dig(operator_doc, "split", "pc", "playlists"))
    for mode in OPERATOR_PLAYLISTS:
        operators = dig(playlists, mode, "operators")
        if operators is not None:
            return mode, operators
    return "none", None


def _operator_usage(raw: Any) -> OperatorUsage:
    raw = _as_dict(raw)
    lifetime = _as_dict(dig(raw, "rounds", "lifetime"))
    win_rate = lifetime.get("winRate")
    is_number = isinstance(win_rate, (int, float)) and not isinstance(win_rate, bool)
    return OperatorUsage(
        name=str(first_present(raw, OPERATOR_NAME_ACCESSORS, default=MISSING)),
        played=to_number(lifetime.get("played")),
        won=to_number(lifetime.get("won")),
        win_rate=round_half_up(win_rate, 1) if is_number else None,
    )


def rank_operators(operators: Union[Dict[str, Any], List[Any], None]) -> List[OperatorUsage]:
    """
    Most played first, ties broken by name, capped at TOP_OPERATORS_LIMIT.
    """
    if operators is None:
        return []
    raw_items = operators.values() if isinstance(operators, dict) else _as_list(operators)
    usages = [_operator_usage(raw) for raw in raw_items]
    usages.sort(key=lambda op: (-op.played, op.name.lower()))
    return usages[:TOP_OPERATORS_LIMIT]


def select_top_operator(username: str, top_operators: List[OperatorUsage]) -> TopOperator:
    """
    The most played operator, or the username-derived fallback when
    there is no operator data. A best operator whose name cannot be slugged
    keeps its name and borrows the fallback slug for the image.
    """
    fallback = fallback_operator_slug(username)
    if top_operators:
        best = top_operators[0]
        return TopOperator(slug=slugify(best.name) or fallback, name=best.name)
    return TopOperator(slug=fallback, name=fallback.capitalize())


# =============================================================================
# ENTRY POINT
# =============================================================================


def normalize_player_stats(
    platform: str,
    username: str,
    stats_doc: Any,
    operator_doc: Any = None,
) -> PlayerStatsPayload:
    """
    Build the stable player payload from the two raw upstream documents.

    Args:
        platform: Platform path segment of the lookup
        username: Name as requested
        stats_doc: Body of the "stats" call
        operator_doc: Body of the "operatorStats" call, None if it failed
    """
    ranked_board, standard_board = select_boards(stats_doc)
    playlist, operators = select_operator_playlist(operator_doc)
    top_operators = rank_operators(operators)

    return PlayerStatsPayload(
        platform=platform,
        username=username,
        top_operator=select_top_operator(username, top_operators),
        top_operators=top_operators,
        ranked=extract_ranked(ranked_board),
        unranked=extract_unranked(standard_board),
        ranked_seasons=extract_seasons(ranked_board),
        operators_playlist=playlist,
    )


def build_mock_player_payload(platform: str, username: str) -> Dict[str, Any]:
    """
    Placeholder profile used whenever live data cannot be obtained.
    Every stat is "-" so the UI can tell it apart from a real zero.
    """
    slug = fallback_operator_slug(username)
    ranked_keys = (
        "currentRank", "mmr", "kd", "winRate", "matches", "wins",
        "losses", "kills", "deaths", "peakRank", "peakMmr",
    )
    unranked_keys = ("matches", "wins", "losses", "kd", "winRate", "kills", "deaths")
    return {
        "platform": platform,
        "username": username,
        "topOperator": TopOperator(slug=slug, name=slug.capitalize()).to_dict(),
        "topOperators": [],
        "operators": [],
        "stats": {
            "ranked": {key: MISSING for key in ranked_keys},
            "unranked": {key: MISSING for key in unranked_keys},
            "rankedSeasons": [],
        },
    }
