"""Line classifiers for the notemark lexer.

Each classifier is a mixin that decides whether one raw line matches a
particular block pattern. Classifiers are pure: they never consume input or
touch assembler state.
"""

from notemark.lexer.classifiers.fence import FenceClassifierMixin
from notemark.lexer.classifiers.heading import HeadingClassifierMixin
from notemark.lexer.classifiers.list import ListClassifierMixin
from notemark.lexer.classifiers.quote import QuoteClassifierMixin
from notemark.lexer.classifiers.table import TableClassifierMixin
from notemark.lexer.classifiers.thematic import ThematicClassifierMixin

__all__ = [
    "FenceClassifierMixin",
    "HeadingClassifierMixin",
    "ListClassifierMixin",
    "QuoteClassifierMixin",
    "TableClassifierMixin",
    "ThematicClassifierMixin",
]
