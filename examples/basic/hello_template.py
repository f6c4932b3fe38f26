"""Parse a template and print its top-level nodes."""

from curlymark import parse

nodes = parse('<Greeting name="{{ user.name }}">Hello, {{ user.name }}!</Greeting>')
for node in nodes:
    print(node)
