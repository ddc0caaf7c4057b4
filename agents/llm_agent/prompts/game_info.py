GAME_INFO = """
### GAME OVERVIEW
- Turn-based tactical combat between two sides on a 7x7 grid (x = column 1..7 left to right, y = row 1..7 top to bottom)
- **Objective:** Eliminate every enemy unit
- **Defeat Condition:** Lose all of your units
- The player side starts at the bottom (rows 6-7) facing NORTH, the computer side at the top (rows 1-2) facing SOUTH

### UNIT TYPES
**Infantry**
- 1 move point per turn, melee only

**Archer**
- 1 move point per turn, ranged
- Fires at a diagonal neighbour, or 2 tiles away in a straight line when the tile in between is empty
- Cannot fire while an enemy stands orthogonally adjacent to it
- Overrun automatically when attacked by any melee unit

**Cavalry**
- 2 move points per turn, melee only
- May move 2 tiles in a straight line in one action (a charge) if the middle tile is empty
- Gains +1 attack strength while it still has a move point left

### MOVEMENT
- A move goes to an orthogonally adjacent empty tile and costs 1 point (a cavalry charge costs 2)
- Moving turns the unit to face the direction it moved
- Rotating is free but needs at least 1 move point left

### COMBAT
- A unit can only attack targets in front of it (the target must lie ahead of its facing)
- Melee units attack orthogonally adjacent enemies
- Every unit has strength 1, plus 1 for every one of its side's support lines crossing its tile
- A melee attacker that is not standing on the defender's front tile gains +1 (flank)
- Several units may join one attack; their strengths are added
- Attackers stronger: the defender is removed
- Defender stronger: every attacker is removed, unless all attackers were archers (the volley just fails)
- Equal: nobody is removed
- Each unit attacks at most once per turn

### SUPPORT LINES
- Each side owns 3 hidden rows or columns; you only know your own
"""
