from .shared import printf, show
from .symbol_table import SymbolTable
from .table import Empty, Table, format_slot


def dump_table(table: Table, name: str):
    printf("== {0:s} ==\n", name)
    printf(
        "count {0} tombstones {1} vacant {2} capacity {3} load {4:.2f}\n",
        table.count,
        table.tombstones,
        table.vacant,
        table.capacity,
        table.load_factor(),
    )

    for index, entry in enumerate(table.entries):
        if isinstance(entry, Empty):
            continue
        dump_slot(table, index)


def dump_slot(table: Table, index: int):
    entry = table.entries[index]
    printf("{0:04d} {1}\n", index, format_slot(entry))


def dump_symbol_table(symbol_table: SymbolTable, name: str):
    printf("== {0:s} ==\n", name)
    for token, position in sorted(symbol_table.symbols(), key=lambda pair: pair[1]):
        printf("{0:4d} {1}\n", position, show(token))
