"""
Siege Stats backend: r6data player lookups, latest Siege video, operator catalog.
"""
