"""Evaluation session: the variable and function stores of one REPL user.

Every evaluation call receives the session explicitly. Nothing is kept at
module level, so independent sessions (one per TCP client, one per test) never
observe each other's definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chainlisp.types.node import Node, wrap
from chainlisp.types.environment import new_environment, define


@dataclass
class Session:
    variables: Node = field(default_factory=new_environment)
    functions: Node = field(default_factory=new_environment)

    def is_global(self, env: Node) -> bool:
        return env is self.variables

    def publish_variables(self, env: Node) -> None:
        self.variables = env

    def define_function(self, signature: Node, body: Node) -> None:
        """Store ``(signature body)``; function definitions are always global."""
        self.functions = define(signature, wrap(body), self.functions)

    def reset(self) -> None:
        self.variables = new_environment()
        self.functions = new_environment()
