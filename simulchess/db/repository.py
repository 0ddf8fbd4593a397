"""Protocol repository + in-memory implementation (games only live as long as the process)"""

from typing import Protocol
from uuid import UUID, uuid4

from simulchess.chess.game import Game


class GameRepository(Protocol):
    """Storage of running games"""

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: Game) -> tuple[Game, UUID]:
        """Store new game and return the stored game + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: Game) -> Game | None:
        """Replace an existing record."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game's record."""
        ...


class InMemoryGameRepository:
    """Games stored in a dictionary keyed by their ID"""

    def __init__(self) -> None:
        self._games: dict[UUID, Game] = {}

    def get_game(self, game_id: UUID) -> Game | None:
        return self._games.get(game_id)

    def create_game(self, game: Game) -> tuple[Game, UUID]:
        new_id = uuid4()
        self._games[new_id] = game
        return game, new_id

    def update_game(self, game_id: UUID, game: Game) -> Game | None:
        if game_id not in self._games:
            return None
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> Game | None:
        return self._games.pop(game_id, None)
