"""Typed AST: list every executable block a renderer would need to evaluate."""

from curlymark import parse
from curlymark.nodes import Executable
from curlymark.visitor import BaseVisitor


class ExecutableCollector(BaseVisitor[None]):
    """Collect executable sources with their line numbers."""

    def __init__(self) -> None:
        self.found: list[tuple[int, str]] = []

    def visit_executable(self, node: Executable) -> None:
        self.found.append((node.position_start.line, node.source.strip()))


source = """<header id="top">
  <Banner title="Hi {{ user.first_name }}" />
  <UserSelector name={{ name }} open={{ false }} />
  <p>{{ items.length }} items</p>
</header>
"""

collector = ExecutableCollector()
for node in parse(source):
    collector.visit(node)

for line, expr in collector.found:
    print(f"line {line}: {expr}")
