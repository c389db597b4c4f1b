# slingfort

slingfort is a slingshot arcade game. You pull the bird back from the sling,
let it go, and bring down the wooden towers on the right of the screen.

- A bird that hits an enemy kills it at once.
- A falling block does one point of damage to an enemy and knocks it to the
  ground.
- An enemy dies after three block hits.

## Installing

```
pip install .
```

This installs the game and pygame, its only dependency.

## Playing

```
slingfort
```

The game opens on the main menu, which has three click areas:

- the play area starts the game;
- the settings area opens the settings panel;
- the exit area closes the game.

There are two levels. When every enemy in the first level is gone, a
level-complete screen appears. From there you can go on to the next level,
keeping your score, or go back to the main menu. After the second level is
cleared, the game shows "ALL LEVELS COMPLETE!".

Controls:

- **Mouse:** press on the bird, drag it back and release it to launch it.
  While you drag, a fading dotted line shows the predicted flight path.
- **R:** restarts the current level with a score of zero and three lives.
- **Escape** or closing the window: quits.
- **Settings button** (top right): opens the settings panel. The panel has a
  master volume slider, a switch for the aiming line and a choice of
  difficulty (Easy, Medium or Hard). Click **Close** to dismiss it.

You start with three birds. A bird is used up when it comes to rest or leaves
the screen. The game is over when the last bird is used up.

### Scoring

| Event                          | Points |
|--------------------------------|--------|
| Bird knocks a block loose      | 10     |
| Falling block kills an enemy   | 100    |
| Bird hits an enemy             | 150    |

### Classic mode

```
slingfort --classic
```

Classic mode is a single-level game with simpler block physics and no
settings panel. In this mode a block stops dead when it reaches the ground.
Hitting an enemy with the bird, or with a falling block, only knocks it
down. You must then hit the enemy with the bird while it lies on the ground,
which kills it for 50 points. Each block the bird knocks loose is worth 20
points. The game shows "YOU WIN!" once every enemy is gone.

### Images

The game looks for its images in the current directory. You can give a
different directory with `--assets`:

```
slingfort --assets path/to/images
```

The game expects these image files:

- `backpeace.jpg`
- `ground.png`
- `sling.png`
- `blockd.png`
- `blocky.png`
- `enemy.png`
- `menu.png`
- `angrybird.png`

If an image is missing or cannot be read, the game logs an error and runs
without drawing that image.

## What the game does not do

- There is no sound. The master volume slider records a value, but nothing
  plays audio.
- The difficulty setting is recorded, but it does not change how the game
  plays.
- Scores are not saved between runs.

## Using the game model in code

The rules live in `slingfort.world.World` and `slingfort.classic.ClassicWorld`.
Neither depends on pygame, so you can drive them frame by frame with
`FrameInput` values:

```python
import random

from slingfort.geometry import Vec2
from slingfort.world import FrameInput, World

world = World(random.Random(0))
world.menu_click(Vec2(950.0, 200.0))  # the play area; the world is now in GameState.GAME
world.step(FrameInput(mouse=Vec2(150.0, 400.0), mouse_pressed=True))
print(world.score, world.lives, world.all_enemies_dead())
```

Other useful pieces:

- `slingfort.geometry` holds the vector and rectangle types, the collision
  tests and `trajectory`.
- `slingfort.entities.level_blocks` and `slingfort.entities.level_enemies`
  give the layout of each level.
- `slingfort.classic_setup` gives the layout for classic mode.
- `slingfort.settings.SettingsPanel` models the settings panel.