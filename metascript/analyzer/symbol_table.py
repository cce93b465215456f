"""
Symbol tables consulted by the MetaScript parser while it resolves names.

There is no scope tree: each table is a flat, insertion-ordered list that is
searched front to back, and the first entry with a matching name wins.
Entries are appended when their declaration is parsed and only removed when
the construct that introduced them closes (procedure parameters, loop
counters). Everything else lives until the end of the parse.

Author: xwest
"""

from contextlib import contextmanager
from enum import Enum
from typing import Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from ..parser.ast_nodes import VariableNode, ProcDefNode, StructDefNode, ImplNode


T = TypeVar("T")


class SymbolKind(Enum):
    """Which table a symbol lives in."""
    VARIABLE = "variable"
    PROCEDURE = "procedure"
    STRUCT = "struct"
    IMPL = "impl"


class SymbolTable(Generic[T]):
    """
    A flat table keyed by name.

    Lookup is a linear scan where the first match wins, so declaring a name
    twice keeps both entries but only the older one is ever found.
    """

    def __init__(self, kind: SymbolKind, key: Callable[[T], str]):
        self.kind = kind
        self._key = key
        self._entries: List[T] = []

    def declare(self, entry: T) -> bool:
        """
        Append an entry.

        Returns:
            True if an entry with the same name was already present
        """
        shadowed = self.contains(self._key(entry))
        self._entries.append(entry)
        return shadowed

    def lookup(self, name: str) -> Optional[T]:
        for entry in self._entries:
            if self._key(entry) == name:
                return entry
        return None

    def contains(self, name: str) -> bool:
        return self.lookup(name) is not None

    def remove(self, entry: T) -> bool:
        """Remove this exact entry (by identity). Returns False if it was not present."""
        for index, existing in enumerate(self._entries):
            if existing is entry:
                del self._entries[index]
                return True
        return False

    @contextmanager
    def scoped(self, entries: Iterable[T]) -> Iterator[None]:
        """Declare entries for the duration of a block, removing them afterwards."""
        declared = list(entries)
        for entry in declared:
            self.declare(entry)
        try:
            yield
        finally:
            for entry in declared:
                self.remove(entry)

    def names(self) -> List[str]:
        return [self._key(entry) for entry in self._entries]

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __str__(self) -> str:
        return f"SymbolTable({self.kind.value}, {len(self._entries)} entries)"


class SymbolTables:
    """
    The tables owned by one parser: variables, procedures, and struct
    definitions together with their impl blocks.
    """

    def __init__(self):
        self.variables: SymbolTable['VariableNode'] = SymbolTable(
            SymbolKind.VARIABLE, lambda variable: variable.metadata.name
        )
        self.procedures: SymbolTable['ProcDefNode'] = SymbolTable(
            SymbolKind.PROCEDURE, lambda proc_def: proc_def.name
        )
        self.structs: SymbolTable['StructDefNode'] = SymbolTable(
            SymbolKind.STRUCT, lambda struct_def: struct_def.type_name
        )
        self.impls: SymbolTable['ImplNode'] = SymbolTable(
            SymbolKind.IMPL, lambda impl_node: impl_node.struct_def.type_name
        )

    def resolve(self, name: str) -> Optional[Tuple[SymbolKind, object]]:
        """Resolve an identifier: variables first, then procedures, then structs."""
        for table in (self.variables, self.procedures, self.structs):
            entry = table.lookup(name)
            if entry is not None:
                return table.kind, entry
        return None

    def visible_names(self) -> List[str]:
        """Every name an identifier could currently resolve to."""
        return self.variables.names() + self.procedures.names() + self.structs.names()
