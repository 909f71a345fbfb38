"""
Static operator catalog.
Images are expected at /public/assets/operators/<slug>.jpg on the frontend.
"""
from typing import Any, Dict, List, Optional

from siegestats.normalizer import operator_image_url

ATTACKER = "attacker"
DEFENDER = "defender"


def _op(slug: str, name: str, side: str, health: int, speed: int, difficulty: int, description: str) -> Dict[str, Any]:
    return {
        "slug": slug,
        "name": name,
        "side": side,
        "description": description,
        "health": health,
        "speed": speed,
        "difficulty": difficulty,
        "imageUrl": operator_image_url(slug),
    }


# (slug, name, side, health, speed, difficulty, description)
OPERATORS: List[Dict[str, Any]] = [
    # ---------------- ATTACKERS (38) ----------------
    _op("rauora", "Rauora", ATTACKER, 2, 2, 2, "Attacker built around pressure and utility to open up plays."),
    _op("striker", "Striker", ATTACKER, 2, 2, 1, "Flexible attacker geared towards entry and gunfights."),
    _op("deimos", "Deimos", ATTACKER, 2, 2, 3, "Aggressive hunter: pressures and hunts picks with intel."),
    _op("ram", "Ram", ATTACKER, 2, 2, 2, "Destruction specialist who clears utility from above."),
    _op("brava", "Brava", ATTACKER, 2, 2, 3, "Hacks defensive gadgets to turn the round in your favour."),
    _op("grim", "Grim", ATTACKER, 2, 2, 2, "Intel and area control to force rotations."),
    _op("sens", "Sens", ATTACKER, 2, 2, 2, "Cuts sightlines to cover the plant or the push."),
    _op("osa", "Osa", ATTACKER, 2, 2, 2, "Transparent shields to push safely."),
    _op("flores", "Flores", ATTACKER, 2, 2, 2, "Clears gadgets from range with explosive drones."),
    _op("zero", "Zero", ATTACKER, 2, 2, 2, "Cameras for intel, support and round control."),
    _op("ace", "Ace", ATTACKER, 2, 2, 1, "Fast hard breacher that is simple to play."),
    _op("iana", "Iana", ATTACKER, 2, 2, 2, "Entry intel: a human drone to clear angles."),
    _op("kali", "Kali", ATTACKER, 2, 2, 3, "Long-range anti-gadget with big pick potential."),
    _op("amaru", "Amaru", ATTACKER, 2, 3, 2, "Fast vertical entry for aggression and surprises."),
    _op("nokk", "NOKK", ATTACKER, 2, 2, 3, "Infiltration and stealth, ideal for flanks."),
    _op("gridlock", "Gridlock", ATTACKER, 3, 1, 2, "Rotation control and post-plant traps."),
    _op("nomad", "Nomad", ATTACKER, 2, 2, 2, "Shuts down flanks and protects the plant with blasts."),
    _op("maverick", "Maverick", ATTACKER, 2, 2, 3, "Surgical blowtorch hard breach with a high skill ceiling."),
    _op("lion", "Lion", ATTACKER, 2, 2, 2, "Map-wide scans to coordinate pushes."),
    _op("finka", "Finka", ATTACKER, 2, 2, 1, "Team support and sustain for entries."),
    _op("dokkaebi", "Dokkaebi", ATTACKER, 2, 2, 3, "Disruption and intel: forces calls and hacks cams."),
    _op("zofia", "Zofia", ATTACKER, 2, 2, 2, "Very complete explosive and concussion utility."),
    _op("ying", "Ying", ATTACKER, 2, 2, 2, "Flash entry, ideal for fast executes."),
    _op("jackal", "Jackal", ATTACKER, 2, 2, 2, "Tracks roamers and punishes rotations."),
    _op("hibana", "Hibana", ATTACKER, 2, 2, 2, "Hard breacher that opens walls from range."),
    _op("capitao", "Capitão", ATTACKER, 2, 2, 2, "Smoke and fire bolts to cut and deny areas."),
    _op("blackbeard", "Blackbeard", ATTACKER, 2, 2, 2, "Wins angle duels thanks to his rifle shield."),
    _op("buck", "Buck", ATTACKER, 2, 2, 2, "Vertical destruction and flex to open lines."),
    _op("sledge", "Sledge", ATTACKER, 3, 1, 1, "Hammer to break surfaces and clear utility."),
    _op("thatcher", "Thatcher", ATTACKER, 2, 2, 1, "Classic anti-gadget that enables breachers."),
    _op("ash", "Ash", ATTACKER, 1, 3, 1, "Fast entry with precise destruction."),
    _op("thermite", "Thermite", ATTACKER, 2, 2, 2, "Main hard breacher: big openings in reinforced walls."),
    _op("montagne", "Montagne", ATTACKER, 3, 1, 2, "Extendable shield to push and plant under cover."),
    _op("twitch", "Twitch", ATTACKER, 2, 2, 2, "Drones to destroy gadgets and gather intel."),
    _op("blitz", "Blitz", ATTACKER, 2, 2, 2, "Flash shield for aggressive close-range entries."),
    _op("iq", "IQ", ATTACKER, 1, 3, 2, "Detects electronics and opens safe routes."),
    _op("fuze", "Fuze", ATTACKER, 3, 1, 2, "Cluster charge pressure to clear defenders."),
    _op("glaz", "Glaz", ATTACKER, 2, 2, 2, "Marksman: controls long lines and through-smoke plays."),
    # ---------------- DEFENDERS (38) ----------------
    _op("denari", "Denari", DEFENDER, 2, 2, 2, "Defender focused on area control and anchoring."),
    _op("skopos", "Skopós", DEFENDER, 2, 2, 2, "Defender focused on control and tactical utility."),
    _op("sentry", "Sentry", DEFENDER, 2, 2, 2, "Defender who holds areas and punishes pushes."),
    _op("tubarao", "Tubarão", DEFENDER, 2, 2, 2, "Tempo control: slows pushes and denies utility."),
    _op("fenrir", "Fenrir", DEFENDER, 2, 2, 3, "Traps that disorient attackers to win duels."),
    _op("solis", "Solis", DEFENDER, 2, 2, 3, "Hunts drones and gadgets to deny intel."),
    _op("azami", "Azami", DEFENDER, 2, 2, 3, "Reshapes the map with cover and blockades."),
    _op("thorn", "Thorn", DEFENDER, 2, 2, 2, "Explosive trapper that stops entries."),
    _op("thunderbird", "Thunderbird", DEFENDER, 2, 2, 1, "Healing support to hold the site."),
    _op("aruni", "Aruni", DEFENDER, 2, 2, 2, "Laser gates that drain utility and time."),
    _op("melusi", "Melusi", DEFENDER, 2, 2, 2, "Area control that slows attackers and forces decisions."),
    _op("oryx", "Oryx", DEFENDER, 2, 2, 2, "Aggressive roamer with mobility for picks."),
    _op("wamai", "Wamai", DEFENDER, 2, 2, 2, "Anti-grenade: redirects projectiles and protects setups."),
    _op("goyo", "Goyo", DEFENDER, 2, 2, 2, "Area denial and time control with fire."),
    _op("warden", "Warden", DEFENDER, 2, 2, 2, "Smoke and flash counter to hold angles."),
    _op("mozzie", "Mozzie", DEFENDER, 2, 2, 2, "Denies drones and gains intel by capturing them."),
    _op("kaid", "Kaid", DEFENDER, 3, 1, 2, "Electrifies walls and hatches from range."),
    _op("clash", "Clash", DEFENDER, 3, 1, 3, "Electric shield to stop pushes and gather info."),
    _op("maestro", "Maestro", DEFENDER, 3, 1, 2, "Armored cameras for intel and constant pressure."),
    _op("alibi", "Alibi", DEFENDER, 1, 3, 3, "Deception and intel: punishes shots at decoys."),
    _op("vigil", "Vigil", DEFENDER, 2, 2, 2, "Stealthy roamer: denies drones and flanks."),
    _op("ela", "Ela", DEFENDER, 2, 2, 2, "Entry denial with concussion traps."),
    _op("lesion", "Lesion", DEFENDER, 2, 2, 2, "Traps for intel and attrition over time."),
    _op("mira", "Mira", DEFENDER, 3, 1, 3, "One-way windows for full site control."),
    _op("echo", "Echo", DEFENDER, 2, 2, 3, "Drones for intel and disorientation, great post-plant."),
    _op("caveira", "Caveira", DEFENDER, 1, 3, 3, "Stealth roamer hunting interrogations and picks."),
    _op("valkyrie", "Valkyrie", DEFENDER, 2, 2, 2, "Extra cameras for intel and map control."),
    _op("frost", "Frost", DEFENDER, 2, 2, 1, "Traps that punish entries and vaults."),
    _op("mute", "Mute", DEFENDER, 2, 2, 1, "Jammers that deny drones and gadgets."),
    _op("smoke", "Smoke", DEFENDER, 3, 1, 3, "Late-round area denial with gas."),
    _op("castle", "Castle", DEFENDER, 2, 2, 2, "Barricade panels that shape attack routes."),
    _op("pulse", "Pulse", DEFENDER, 1, 3, 2, "Intel: locates enemies through surfaces."),
    _op("doc", "Doc", DEFENDER, 3, 1, 1, "Healing and revive support to hold on."),
    _op("rook", "Rook", DEFENDER, 3, 1, 1, "Armor for the team: easy and solid."),
    _op("jager", "Jager", DEFENDER, 2, 2, 2, "Anti-projectile defense that protects the setup."),
    _op("bandit", "Bandit", DEFENDER, 1, 3, 3, "Electricity to deny breaches, active playstyle."),
    _op("tachanka", "Tachanka", DEFENDER, 3, 1, 2, "Area denial with fire and time control."),
    _op("kapkan", "Kapkan", DEFENDER, 2, 2, 1, "Explosive door traps that punish rushes."),
]

_BY_SLUG: Dict[str, Dict[str, Any]] = {op["slug"]: op for op in OPERATORS}


def get_operator(slug: str) -> Optional[Dict[str, Any]]:
    """Catalog record by slug, or None if unknown."""
    return _BY_SLUG.get(slug)


def catalog_summary() -> Dict[str, Any]:
    """Whole catalog plus side counts, as served by GET /api/operators."""
    return {
        "cached": False,
        "mock": True,
        "total": len(OPERATORS),
        "attackers": sum(1 for op in OPERATORS if op["side"] == ATTACKER),
        "defenders": sum(1 for op in OPERATORS if op["side"] == DEFENDER),
        "data": OPERATORS,
    }
