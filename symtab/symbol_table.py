from typing import Iterator

from .table import HashFunction, Table, default_hash


class SymbolTable:
    """Positions count up from 0 in first-seen order and are never reused."""

    table: Table[str, int]
    last_index: int

    def __init__(self, hash_function: HashFunction = default_hash) -> None:
        self.table = Table(hash_function)
        self.last_index = -1

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, token: str) -> bool:
        return self.contains_token(token)

    def insert_symbol(self, token: str):
        if self.contains_token(token):
            return
        self.last_index += 1
        self.table.insert(token, self.last_index)

    def get_position_of_symbol(self, token: str) -> int | None:
        return self.table.get(token)

    def get_symbol_at_position(self, position: int) -> str | None:
        # positions are unique, so the first match is the only one
        for token, token_position in self.table.iter():
            if token_position == position:
                return token
        return None

    def remove(self, token: str):
        self.table.remove(token)

    def contains_token(self, token: str) -> bool:
        return self.table.contains_key(token)

    def symbols(self) -> Iterator[tuple[str, int]]:
        return self.table.iter()
