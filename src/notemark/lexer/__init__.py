"""Line classifier for the notemark block assembler.

Architecture:
lexer/
├── __init__.py          # Re-exports LineClassifier, split_lines
├── core.py              # LineClassifier (mixin composition + priority order)
└── classifiers/         # One mixin per block pattern
    ├── fence.py         # ``` delimiters
    ├── heading.py       # # headings
    ├── thematic.py      # horizontal rules
    ├── quote.py         # > quotes
    ├── list.py          # task, bullet and ordered items
    └── table.py         # | pipe | rows |

Usage:
    >>> from notemark.lexer import LineClassifier
    >>> for line in LineClassifier().tokenize("# Hello\\n\\nWorld"):
    ...     print(line)
Line(HEADING, 'Hello', 1)
Line(BLANK, '', 2)
Line(PARAGRAPH, 'World', 3)

"""

from notemark.lexer.core import LineClassifier, split_lines

__all__ = ["LineClassifier", "split_lines"]
