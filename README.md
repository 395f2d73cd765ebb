# lifestag

A small arcade game for the terminal. You are a Stag walking through a world
of Time-Stealing Monsters that rise from the bottom of the screen. Dodge them
and collect the money bags that rise with them to score points. Five hits from
a monster end the game.

## Requirements

- Python 3.10 or later on a POSIX system (the keyboard handling uses
  `termios`).
- A terminal that understands ANSI escape sequences, at least 80 columns wide
  and 25 rows tall.

## Installing

```
pip install .
```

## Playing

```
lifestag
```

The command takes no options other than `--help`. The game first asks for
your nickname (at most 19 characters are kept). After a short loading
animation the main menu appears:

- `1` shows the rules, waits for ENTER and then starts a game.
- `2` shows the ranking and waits for ENTER.
- `3` quits. The end of input quits as well.

During a game, `a` moves the Stag left and `d` moves it right. The bottom line
of the screen shows your points, how many monsters have hit you (out of 5),
the seconds elapsed and your name. Every ten seconds two more monsters may be
on screen at the same time, up to one hundred.

When the game ends, your score is appended to `ranking.txt` in the current
directory and the ranking is drawn: up to ten scores, highest first. Press `q`
to return to the menu.

If standard input is not a terminal, the game reads keys from it as a plain
stream instead of switching the terminal into non-canonical mode.

## Sound

Each time the menu is drawn, the game tries to open `./assets/menu.wav`
through `powershell.exe Start-Process`. This only works when the game runs
under WSL from a directory below `/mnt/c/`; there it prints the converted
Windows path and starts the player. Anywhere else it prints a notice and goes
on without sound. No other sound is played, and there is no sound support on
other systems.

## Using the pieces

The modules can also be used on their own:

- `lifestag.screen`: the `Screen` class, which writes ANSI cursor, colour and
  box-drawing sequences to a stream, the `Color` enumeration, and the helpers
  `gotoxy_sequence` and `color_sequence`.
- `lifestag.keyboard`: the `Keyboard` context manager, which puts a terminal
  in non-canonical, no-echo mode and polls keys with `keyhit()` and
  `readch()`.
- `lifestag.timer`: the `Timer` class, which measures elapsed milliseconds
  (`time_diff()`) and reports when a delay has passed (`time_over()`).
- `lifestag.ranking`: `RankEntry`, `load_ranking`, `sort_ranking`,
  `save_score`, `format_rank_line` and `show_ranking` for the score file.
- `lifestag.sound`: `windows_path` and `play_sound`.
- `lifestag.game`: `GameState`, which holds the game logic with no terminal
  attached, the `collides` box test, the drawing helpers, and `play_game`,
  which runs a full session.
- `lifestag.menu`: the menu screens, `run_menu` and the `main` entry point.

```python
import random
from lifestag.game import GameState

state = GameState("stag", random.Random(1))
while not state.is_over():
    state.tick()
print(state.points, state.collisions)
```

## Running the tests

```
pip install .[test]
pytest
```