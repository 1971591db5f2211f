#!/usr/bin/env python3
"""
Hrad - a text adventure with arithmetic fights.
Explore the castle, beat its monsters by answering questions, find the key
and bring it back to the cellar. All game logic lives in this file.
"""

import os
import sys
import random
import re
from collections import deque
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

# === [CONFIGURATION] ===
class Config:
    """All game constants and configuration."""
    GAME_TITLE = "Hrad"
    VERSION = "1.0.0"
    LOGS_DIR = "logs"
    DEBUG_MODE = False

    START_ROOM = "Sklep"

    # Question generator
    OPERAND_MIN = 1
    OPERAND_MAX = 9
    OPERATORS = ("+", "-", "*", "/")
    DIVISION_FALLBACK = 1  # Answer used instead of dividing by zero

    # Rooms that may hold the key (never the start room or a deadly room)
    KEY_ROOM_CANDIDATES = (
        "Kuchyň", "Zahrada", "Zvěřinec", "Vinárna", "Pekárna", "Prádelna",
        "Lázně", "Bastion", "Stáje", "Velká síň", "Observatoř", "Laboratoř", "Knihovna",
    )

    DEFAULT_DEATH_MESSAGE = "Tato místnost je smrtící! Konec hry!"
    COMMAND_PROMPT = "Enter command: "

    # File paths
    DEBUG_LOG = os.path.join(LOGS_DIR, "debug.log")

# === [LOGGING SYSTEM] ===
def setup_directories():
    """Create necessary directories if they don't exist."""
    try:
        os.makedirs(Config.LOGS_DIR, exist_ok=True)
    except OSError as e:
        print(f"Logging error: {e}")

def log_event(event_type: str, message: str) -> None:
    """Log game events for debugging.

    Side effects:
        - Appends to debug.log
    """
    try:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_message = f"[{timestamp}] {event_type}: {message}\n"

        with open(Config.DEBUG_LOG, "a", encoding="utf-8") as f:
            f.write(log_message)

        if Config.DEBUG_MODE:
            print(f"DEBUG: {log_message.strip()}")
    except OSError as e:
        print(f"Logging error: {e}")

# === [GAME ENTITIES] ===
class EnemyStrategy(Enum):
    """How a room's enemy fights: flavour text and number of questions to beat it."""
    AGGRESSIVE = ("Nepřítel útočí agresivně!", 2)
    DEFENSIVE = ("Nepřítel se brání a čeká.", 1)

    def __init__(self, attack_message: str, questions_required: int):
        self.attack_message = attack_message
        self.questions_required = questions_required

    def attack(self) -> str:
        """Return the attack announcement."""
        return self.attack_message

@dataclass(eq=False)
class Room:
    """A location in the castle.

    `correct_answer` belongs to the static `question` text and is kept for
    reference only; fights always use freshly generated questions.
    """
    name: str
    question: Optional[str] = None
    correct_answer: int = 0
    enemy_name: Optional[str] = None
    deadly: bool = False
    death_message: Optional[str] = None
    enemy_strategy: EnemyStrategy = EnemyStrategy.AGGRESSIVE
    neighbors: List['Room'] = field(default_factory=list, repr=False)
    has_key: bool = False
    visited: bool = False

    def exit_names(self) -> List[str]:
        """Names of the neighbouring rooms in exit order."""
        return [room.name for room in self.neighbors]

    def has_enemy(self) -> bool:
        return bool(self.enemy_name)

    def has_question(self) -> bool:
        return bool(self.question)

def create_room(name: str, question: Optional[str], correct_answer: int,
                enemy_name: Optional[str] = None, deadly: bool = False,
                death_message: Optional[str] = None,
                enemy_strategy: Optional[EnemyStrategy] = None) -> Room:
    """Room factory; rooms without an explicit strategy fight aggressively."""
    return Room(
        name=name,
        question=question,
        correct_answer=correct_answer,
        enemy_name=enemy_name,
        deadly=deadly,
        death_message=death_message,
        enemy_strategy=enemy_strategy or EnemyStrategy.AGGRESSIVE,
    )

# === [MAP BUILDER] ===
ROOM_CATALOG = [
    # name, question, answer, enemy, deadly, death message, strategy
    ("Sklep", "1 - 1", 0, "Obrovský pavouk", False, None, EnemyStrategy.DEFENSIVE),
    ("Kuchyň", "2 + 3", 5, "Rychlesešířící Hrnečku vař", False, None, None),
    ("Zahrada", "5 * 2", 10, "Krvelačná Mandragora", False, None, EnemyStrategy.DEFENSIVE),
    ("Zvěřinec", "6 / 3", 2, "Vlčí strážce", False, None, None),
    ("Lednice", None, 0, None, True, "Umrzl jsi v lednici!", None),
    ("Vinárna", "7 - 2", 5, "Opilý zloděj", False, None, None),
    ("Pekárna", "3 * 3", 9, "Koláčový fantom", False, None, None),
    ("Prádelna", "9 / 3", 3, "Spodničkový bandita", False, None, None),
    ("Katovna", None, 0, None, True, "Kat se špatně probudil a popravil tě!", None),
    ("Lázně", "4 + 2", 6, "Vodní přízrak", False, None, None),
    ("Bastion", "10 - 5", 5, "Kámen duchů", False, None, None),
    ("Stáje", "2 * 4", 8, "Koňský démon", False, None, None),
    ("Strážnice", "8 / 4", 2, "Hrdinský strážce", False, None, None),
    ("Velká síň", "6 + 1", 7, "Velký hlídač", False, None, None),
    ("Královská komnata", "7 - 3", 4, "Král zlodějů", False, None, None),
    ("Skrytý tunel", None, 0, None, True,
     "Ztratil ses v temnotě tunelu a tvé volání nikdo neslyšel.", None),
    ("Trůní sál", "7 * 3", 21, "Králičí král", False, None, None),
    ("Observatoř", "2^3", 8, "Hvězdný věštec", False, None, None),
    ("Laboratoř", "11^2", 121, "Alchymistický mutant", False, None, None),
    ("Knihovna", "150*0", 0, "Strážce zapomenutých svitků", False, None, None),
]

# Exit order matters: the player travels by 1-based index into these lists.
ROOM_EXITS = {
    "Sklep": ["Kuchyň", "Zahrada", "Zvěřinec"],
    "Kuchyň": ["Sklep", "Lednice", "Vinárna", "Pekárna"],
    "Zahrada": ["Sklep", "Strážnice", "Katovna", "Lázně", "Bastion"],
    "Zvěřinec": ["Sklep", "Stáje"],
    "Stáje": ["Zvěřinec", "Strážnice"],
    "Strážnice": ["Stáje", "Knihovna", "Zahrada"],
    "Knihovna": ["Strážnice", "Skrytý tunel"],
    "Vinárna": ["Kuchyň", "Prádelna"],
    "Pekárna": ["Kuchyň", "Prádelna"],
    "Prádelna": ["Vinárna", "Pekárna", "Velká síň", "Observatoř"],
    "Velká síň": ["Královská komnata", "Prádelna"],
    "Observatoř": ["Prádelna", "Katovna", "Laboratoř"],
    "Královská komnata": ["Velká síň", "Laboratoř"],
    "Laboratoř": ["Trůní sál", "Královská komnata", "Observatoř"],
    "Trůní sál": ["Laboratoř", "Lázně", "Bastion"],
    "Lázně": ["Trůní sál", "Zahrada"],
    "Bastion": ["Zahrada", "Trůní sál", "Strážnice"],
}

def reachable_rooms(start: Room) -> List[Room]:
    """Breadth-first walk over exits, starting room first."""
    seen = {start.name}
    order = [start]
    queue = deque([start])
    while queue:
        room = queue.popleft()
        for neighbor in room.neighbors:
            if neighbor.name not in seen:
                seen.add(neighbor.name)
                order.append(neighbor)
                queue.append(neighbor)
    return order

def build_map(rng=random) -> Tuple[Dict[str, Room], Room]:
    """Create every room, wire the exits and hide the key.

    Returns:
        tuple: (rooms by name, start room)
    """
    rooms: Dict[str, Room] = {}
    for name, question, answer, enemy, deadly, death_message, strategy in ROOM_CATALOG:
        rooms[name] = create_room(name, question, answer, enemy, deadly, death_message, strategy)

    for name, exits in ROOM_EXITS.items():
        rooms[name].neighbors.extend(rooms[exit_name] for exit_name in exits)

    key_room_name = rng.choice(Config.KEY_ROOM_CANDIDATES)
    rooms[key_room_name].has_key = True

    start_room = rooms[Config.START_ROOM]
    log_event("MAP", f"Built {len(rooms)} rooms, {len(reachable_rooms(start_room))} reachable "
                     f"from {start_room.name}, key in {key_room_name}")
    return rooms, start_room

# === [QUESTION GENERATOR] ===
def calculate_answer(a: int, operator: str, b: int) -> int:
    """Evaluate one question; division is integer division."""
    if operator == "+":
        return a + b
    elif operator == "-":
        return a - b
    elif operator == "*":
        return a * b
    elif operator == "/":
        if b == 0:
            return Config.DIVISION_FALLBACK
        return a // b
    raise ValueError(f"Unknown operator: {operator}")

def generate_question(rng=random) -> Tuple[str, int]:
    """Draw a random arithmetic question.

    Returns:
        tuple: (prompt such as "7 / 2", correct integer answer)
    """
    a = rng.randint(Config.OPERAND_MIN, Config.OPERAND_MAX)
    b = rng.randint(Config.OPERAND_MIN, Config.OPERAND_MAX)
    operator = rng.choice(Config.OPERATORS)
    return f"{a} {operator} {b}", calculate_answer(a, operator, b)

def parse_number(text: Optional[str]) -> Optional[int]:
    """Read a quiz answer or exit number as an integer, None if it isn't one.

    Only plain ASCII digits with an optional sign count; "1_0" or Arabic-Indic
    digits are not numbers here.
    """
    if text is None:
        return None
    text = text.strip()
    if not re.fullmatch(r"[+-]?[0-9]+", text):
        return None
    return int(text)

# === [GAME STATE] ===
# Session modes
PLAYING = "playing"
DEAD = "dead"
VICTORIOUS = "victorious"
QUIT = "quit"

@dataclass
class GameSession:
    """Everything that changes while a game is played."""
    rooms: Dict[str, Room]
    start_room: Room
    current_room: Optional[Room] = None
    hero_name: str = ""
    has_key: bool = False
    mode: str = PLAYING
    read_line: Callable[[], str] = input
    write: Callable[[str], None] = print
    rng: object = random

    def __post_init__(self):
        if self.current_room is None:
            self.current_room = self.start_room

    def is_running(self) -> bool:
        return self.mode == PLAYING

    def ask(self, prompt: str) -> str:
        """Show a prompt and read one line of input."""
        self.write(prompt)
        return self.read_line()

def new_session(read_line: Callable[[], str] = input,
                write: Callable[[str], None] = print,
                rng=random) -> GameSession:
    """Build a fresh map and put the player in the cellar."""
    rooms, start_room = build_map(rng)
    return GameSession(rooms=rooms, start_room=start_room,
                       read_line=read_line, write=write, rng=rng)

# === [COMMAND CHAIN] ===
# Outcomes of a handled command
HANDLED = "handled"
INVALID = "invalid"

class CommandHandler:
    """One link of the command chain.

    `handle` returns None when the command isn't meant for this handler,
    otherwise HANDLED, INVALID or QUIT.
    """

    def handle(self, command: str, session: GameSession) -> Optional[str]:
        raise NotImplementedError

class MoveCommandHandler(CommandHandler):
    """Travel through an exit given by its 1-based number."""

    def handle(self, command: str, session: GameSession) -> Optional[str]:
        choice = parse_number(command)
        if choice is None:
            session.write("Příkaz není platný nebo neobsahuje číslo.")
            return None

        session.write(f"Zadaná volba: {choice}")
        neighbors = session.current_room.neighbors
        if 0 < choice <= len(neighbors):
            previous = session.current_room
            session.current_room = neighbors[choice - 1]
            session.write(f"Přesun do místnosti: {session.current_room.name}")
            log_event("MOVEMENT", f"{previous.name} -> {session.current_room.name}")
            return HANDLED

        session.write("Zadané číslo není platné. Zkus to znovu.")
        return INVALID

class HelpCommandHandler(CommandHandler):
    def handle(self, command: str, session: GameSession) -> Optional[str]:
        if command == "help":
            display_help(session)
            return HANDLED
        return None

class QuitCommandHandler(CommandHandler):
    def handle(self, command: str, session: GameSession) -> Optional[str]:
        if command == "quit":
            session.write("Děkuji za hraní.")
            log_event("SYSTEM", "Player quit game")
            return QUIT
        return None

COMMAND_CHAIN = (MoveCommandHandler(), HelpCommandHandler(), QuitCommandHandler())

def dispatch_command(command: Optional[str], session: GameSession,
                     chain=COMMAND_CHAIN) -> str:
    """Offer a command to each handler in turn; the first one that answers wins.

    Input is stripped once and every handler sees the stripped text.
    """
    command = (command or "").strip()
    for handler in chain:
        outcome = handler.handle(command, session)
        if outcome is not None:
            return outcome
    return INVALID

# === [UI/DISPLAY] ===
def display_title(session: GameSession) -> None:
    """Show game title and version."""
    session.write("=" * 50)
    session.write(f"    {Config.GAME_TITLE}")
    session.write(f"    Verze {Config.VERSION}")
    session.write("=" * 50)

def display_help(session: GameSession) -> None:
    session.write("Dostupné příkazy:")
    session.write("  <číslo> - přesune tě do vedlejší místnosti.")
    session.write("  quit - opuštění hry.")
    session.write("  help - zobrazí se tato zpráva.")

def display_exits(session: GameSession) -> None:
    session.write("Dostupné východy:")
    for index, name in enumerate(session.current_room.exit_names(), start=1):
        session.write(f"{index}. {name}")

def greet_player(session: GameSession) -> None:
    """Welcome banner and hero name prompt."""
    display_title(session)
    session.write("Vítej ve hře!")
    session.hero_name = (session.ask("Zadej své jméno, hrdino: ") or "").strip()
    session.write(f"\nVítej, statečný hrdino {session.hero_name}!")
    session.write("Tvým úkolem je najít klíč a osvobodit tento hrad od nestvůr.")
    session.write("Použij svůj důvtip k porážení nepřátel a najdi cestu zpět do sklepa. Hodně štěstí!")
    log_event("SYSTEM", f"New game started by {session.hero_name or 'anonymous hero'}")

# === [FIGHTS] ===
def respawn(session: GameSession) -> None:
    """Send the player back to the start room after a lost fight."""
    session.write("Špatná odpověď. Respawn ve Sklepě!")
    log_event("RESPAWN", f"Lost in {session.current_room.name}, back to {session.start_room.name}")
    session.current_room = session.start_room

def fight(session: GameSession, room: Room) -> bool:
    """Ask the questions guarding a room.

    Returns:
        bool: True if every question was answered correctly

    Side effects:
        - Marks the room visited and picks up the key on success
        - Moves the player to the start room on the first wrong answer
    """
    required = room.enemy_strategy.questions_required
    log_event("COMBAT", f"{room.name}: {required} question(s) against {room.enemy_name}")

    for number in range(1, required + 1):
        prompt, answer = generate_question(session.rng)
        reply = parse_number(session.ask(f"Otázka {number}/{required}: {prompt}"))
        if reply != answer:
            log_event("COMBAT", f"{room.name}: '{prompt}' answered {reply}, expected {answer}")
            respawn(session)
            return False
        log_event("COMBAT", f"{room.name}: '{prompt}' answered correctly")
        session.write("Správně!")

    session.write("Porazil jsi nepřítele.")
    room.visited = True

    if room.has_key:
        room.has_key = False
        session.has_key = True
        session.write("Našel jsi klíč! Vrať se s ním do sklepa.")
        log_event("KEY", f"Key picked up in {room.name}")
    return True

# === [MAIN GAME LOOP] ===
def play_turn(session: GameSession) -> None:
    """Play one turn from the player's current room.

    Side effects:
        - May change current room, room flags, key flag and session mode
    """
    room = session.current_room
    session.write(f"\nNacházíš se v {room.name}.")

    if room is session.start_room and session.has_key:
        session.write(f"Gratuluji, {session.hero_name or 'hrdino'}! Přinesl jsi klíč do sklepa "
                      "a osvobodil jsi hrad. Vyhrál jsi!")
        session.mode = VICTORIOUS
        log_event("SYSTEM", "Player won")
        return

    if room.deadly:
        session.write(room.death_message or Config.DEFAULT_DEATH_MESSAGE)
        session.mode = DEAD
        log_event("DEATH", f"Player died in {room.name}")
        return

    if room.has_enemy() and not room.visited:
        session.write(f"Proti tobě stojí {room.enemy_name}!")
        session.write(room.enemy_strategy.attack())

    if room.has_question() and not room.visited:
        if not fight(session, room):
            return

    display_exits(session)

    outcome = dispatch_command(session.ask(Config.COMMAND_PROMPT), session)
    if outcome == QUIT:
        session.mode = QUIT
    elif outcome == INVALID:
        session.write("Nesprávný příkaz. Zkus to znovu.")

def run_game(session: GameSession) -> str:
    """Play turns until the player wins, dies or quits.

    Returns:
        str: the final session mode
    """
    while session.is_running():
        try:
            play_turn(session)
        except KeyboardInterrupt:
            session.write("\n\nHra přerušena. Pro ukončení napiš 'quit'.")
            continue
        except EOFError:
            session.write("\n\nNashledanou!")
            log_event("SYSTEM", "Input closed")
            session.mode = QUIT
    return session.mode

def main():
    """Start an interactive game on the console."""
    try:
        setup_directories()
        session = new_session(read_line=input, write=print)
        greet_player(session)
        run_game(session)
    except (EOFError, KeyboardInterrupt):
        print("\n\nNashledanou!")
    except Exception as e:
        print(f"Fatal error: {e}")
        log_event("FATAL", f"Game crashed: {e}")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
