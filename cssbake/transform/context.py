"""Per-compilation-unit state shared by every invocation in one file."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..ast import Identifier, Program, Stmt
from ..walk import collect_bindings, collect_names


@dataclass
class CompilationUnit:
    """State for one program's transform.

    Created when the program's transform begins, discarded when it ends.
    guard_id is the memoized guard helper identifier; prelude holds
    declarations the driver prepends to the program body afterwards.
    """

    names: set[str] = field(default_factory=set)
    bindings: set[str] = field(default_factory=set)
    guard_id: Identifier | None = None
    prelude: list[Stmt] = field(default_factory=list)

    @classmethod
    def for_program(cls, program: Program) -> CompilationUnit:
        unit = cls()
        collect_names(program, unit.names)
        collect_bindings(program, unit.bindings)
        return unit

    def is_bound(self, name: str) -> bool:
        return name in self.bindings

    def generate_uid(self, name: str) -> str:
        """Fresh `_name`, `_name2`, ... never used anywhere in the unit."""
        base = re.sub(r"[^A-Za-z0-9_$]", "_", name)
        base = re.sub(r"\d+$", "", re.sub(r"^_+", "", base))
        i = 1
        while True:
            uid = f"_{base}{i if i > 1 else ''}"
            if uid not in self.names:
                break
            i += 1
        self.names.add(uid)
        self.bindings.add(uid)
        return uid
