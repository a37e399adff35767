"""
Sample catalog used for demos and first runs.

Twelve games across price points, including two free titles and
two titles rated 18.
"""

from decimal import Decimal
from typing import NamedTuple

from gamestore.models.game import Game


class SampleGame(NamedTuple):
    name: str
    price: Decimal
    category: str
    age_rating: int


SAMPLE_GAMES: tuple[SampleGame, ...] = (
    SampleGame("Minecraft", Decimal("89.90"), "Adventure", 10),
    SampleGame("FIFA 2023", Decimal("199.90"), "Sports", 0),
    SampleGame("The Sims 4", Decimal("129.90"), "Simulation", 12),
    SampleGame("Grand Theft Auto V", Decimal("149.90"), "Action", 18),
    SampleGame("Fortnite", Decimal("0.00"), "Battle Royale", 12),
    SampleGame("Hades", Decimal("79.90"), "Roguelike", 14),
    SampleGame("Stardew Valley", Decimal("24.99"), "Simulation", 0),
    SampleGame("Celeste", Decimal("36.90"), "Platformer", 10),
    SampleGame("Among Us", Decimal("19.99"), "Party", 7),
    SampleGame("Cyberpunk 2077", Decimal("149.99"), "RPG", 18),
    SampleGame("Valorant", Decimal("0.00"), "FPS", 14),
    SampleGame("Rocket League", Decimal("39.99"), "Sports", 3),
)


def get_sample_games() -> list[Game]:
    """Fresh, unsaved Game objects for the sample catalog."""
    return [
        Game(name=s.name, price=s.price, category=s.category, age_rating=s.age_rating)
        for s in SAMPLE_GAMES
    ]
