"""
One-Pixel RPG.

Game-specific systems built on top of the engine:
- Components (player stats and battle statuses)
- World (tile grid, entities, content, generation)
- Battle (turn-based combat)
- Progression (experience and level-ups)
- Town (inn, shop, dialogue)
- Session (state ownership, modes and input routing)
- Presentation (renderer and audio interfaces)
"""
