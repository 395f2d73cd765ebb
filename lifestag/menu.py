"""Title screen, nickname prompt and the main menu loop."""

from __future__ import annotations

import argparse
import sys
import termios
import time
from typing import Sequence, TextIO

from lifestag.game import play_game
from lifestag.keyboard import Keyboard
from lifestag.ranking import PathType, show_ranking
from lifestag.screen import Screen
from lifestag.sound import play_sound

WIDTH = 70
NICKNAME_LENGTH = 19
MENU_SOUND = "./assets/menu.wav"
DEFAULT_RANKING = "ranking.txt"

RED = "\033[1;31m"
GREEN = "\033[1;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[1;34m"
CYAN = "\033[1;36m"
RESET = "\033[0m"

LOGO = (
    " __    ____  ____  ____    ___  ____   __    ___ ",
    "(  )  (_  _)( ___)( ___)  / __)(_  _) /__\\  / __)",
    " )(__  _)(_  )__)  )__)   \\__ \\  )(  /(__)\\( (_-.",
    "(____)(____)(__)  (____)  (___/ (__)(__)(__)\\___/",
)

LOADING_FRAMES = (
    "Carregando [     ]",
    "Carregando [=    ]",
    "Carregando [==   ]",
    "Carregando [===  ]",
    "Carregando [==== ]",
    "Carregando [=====]",
)

NICKNAME_PROMPT = "Olá! Digite o seu apelido para iniciarmos o Jogo :P : "


class _StreamKeys:
    """Key source over a plain text stream, for input that is not a terminal."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._peek: str | None = None

    def keyhit(self) -> bool:
        if self._peek is None:
            ch = self._stream.read(1)
            if ch:
                self._peek = ch
        return self._peek is not None

    def readch(self) -> str:
        if self._peek is None and not self.keyhit():
            raise EOFError("no more input")
        ch, self._peek = self._peek, None
        assert ch is not None
        return ch


def _open_keyboard(stdin: TextIO) -> Keyboard | None:
    try:
        fd = stdin.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    keyboard = Keyboard(fd)
    try:
        keyboard.init()
    except termios.error:
        return None
    return keyboard


def _wait_for_enter(stdin: TextIO) -> None:
    while True:
        ch = stdin.read(1)
        if ch in ("", "\n"):
            return


def draw_logo(screen: Screen) -> None:
    """Draw the title art near the top of the screen."""
    for row, line in enumerate(LOGO, start=2):
        screen.gotoxy(WIDTH // 2 - 20, row)
        screen.write(f"{CYAN}{line}{RESET}")


def loading_animation(screen: Screen, delay: float = 0.2) -> None:
    """Show the loading bar filling up, one frame per delay seconds."""
    for frame in LOADING_FRAMES:
        screen.clear()
        screen.gotoxy(WIDTH // 2 - 8, 10)
        screen.write(f"{GREEN}{frame}{RESET}")
        screen.update()
        time.sleep(delay)


def show_game_info(screen: Screen, stdin: TextIO | None = None) -> None:
    """Explain the rules and wait for ENTER (or the end of input)."""
    source = stdin if stdin is not None else sys.stdin
    screen.clear()
    screen.draw_borders()

    lines = (
        (3, f"{YELLOW}Seja bem-vindo ao {CYAN}Life's Stag{YELLOW}.{RESET}"),
        (5, "Nesse mundo você precisa desviar dos Monstros"),
        (6, "Roubadores de Tempo para sobreviver e ao mesmo"),
        (7, "tempo coletar Dinheiro para ganhar pontos."),
        (9, "Se você colidir com 5 Monstros Roubadores de Tempo, você perde."),
        (11, "Quanto mais tempo sobreviver e mais pontos coletar,"),
        (12, "mais alto você fica no ranking!"),
        (14, f"{GREEN}Boa sorte, querido(a) Stag.{RESET}"),
        (16, "Pressione ENTER para iniciar..."),
    )
    for row, text in lines:
        screen.gotoxy(3, row)
        screen.write(text)
    screen.update()
    _wait_for_enter(source)


def read_nickname(stdin: TextIO | None = None, stream: TextIO | None = None) -> str:
    """Prompt for a nickname of at most 19 characters; empty at end of input."""
    source = stdin if stdin is not None else sys.stdin
    out = stream if stream is not None else sys.stdout
    out.write(NICKNAME_PROMPT)
    out.flush()
    line = source.readline(NICKNAME_LENGTH)
    return line.partition("\n")[0]


def _draw_menu(screen: Screen, nickname: str) -> None:
    screen.clear()
    screen.draw_borders()
    play_sound(MENU_SOUND, stream=screen.stream)
    draw_logo(screen)

    left = WIDTH // 2 - 5
    screen.gotoxy(left, 10)
    screen.write(f"{YELLOW}Olá, {nickname}!{RESET}")
    screen.gotoxy(left, 12)
    screen.write(f"{GREEN}1 - Começar{RESET}")
    screen.gotoxy(left, 13)
    screen.write(f"{CYAN}2 - Ranking{RESET}")
    screen.gotoxy(left, 14)
    screen.write(f"{RED}3 - Sair{RESET}")
    screen.update()


def run_menu(
    stdin: TextIO | None = None,
    stream: TextIO | None = None,
    ranking_path: PathType = DEFAULT_RANKING,
) -> None:
    """Ask for a nickname and run the menu until '3' or the end of input."""
    source = stdin if stdin is not None else sys.stdin
    out = stream if stream is not None else sys.stdout

    nickname = read_nickname(source, out)
    screen = Screen(out)
    screen.init(True)
    keyboard = _open_keyboard(source)
    keys = keyboard if keyboard is not None else _StreamKeys(source)

    try:
        loading_animation(screen)
        while True:
            _draw_menu(screen, nickname)
            choice = source.read(1)
            if choice == "1":
                show_game_info(screen, source)
                screen.clear()
                play_game(screen, keys, nickname, ranking_path, source)
            elif choice == "2":
                screen.clear()
                screen.draw_borders()
                show_ranking(screen, ranking_path)
                screen.gotoxy(WIDTH // 2 - 10, 20)
                screen.write("Pressione ENTER para voltar ao menu...")
                screen.update()
                _wait_for_enter(source)
            elif choice in ("3", ""):
                break
    finally:
        if keyboard is not None:
            keyboard.destroy()
        screen.destroy()
        screen.update()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game from the command line."""
    parser = argparse.ArgumentParser(
        prog="lifestag",
        description="Dodge the time-stealing monsters and collect money.",
    )
    parser.parse_args(argv)
    run_menu()
    return 0


if __name__ == "__main__":
    sys.exit(main())