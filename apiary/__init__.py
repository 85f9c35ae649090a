"""
Apiary: genetically tuned foraging swarms

Bees flock, gather pollen from flowers, store it in the hive, and are
scored on how fast and how often they make the trip. The scores feed a
generational genetic algorithm that lives outside this package.
"""

__version__ = "0.1.0"
