from .base import BaseRule, Rule
from .formatting import BracesRule, BracketsRule, ColonsRule, CommasRule, HyphensRule
from .semantic import FloatValuesRule, KeyOrderingRule, OctalValuesRule, QuotedStringsRule, TruthyRule
from .style import EmptyLinesRule, IndentationRule, LineLengthRule, NewLineAtEndOfFileRule, TrailingSpacesRule
from .syntax import AnchorsRule, CommentsRule, DocumentStructureRule, KeyDuplicatesRule, YamlSyntaxRule

__all__ = [
    "BaseRule",
    "Rule",
    "LineLengthRule",
    "TrailingSpacesRule",
    "EmptyLinesRule",
    "IndentationRule",
    "NewLineAtEndOfFileRule",
    "KeyDuplicatesRule",
    "DocumentStructureRule",
    "AnchorsRule",
    "YamlSyntaxRule",
    "CommentsRule",
    "BracketsRule",
    "BracesRule",
    "ColonsRule",
    "CommasRule",
    "HyphensRule",
    "TruthyRule",
    "QuotedStringsRule",
    "KeyOrderingRule",
    "FloatValuesRule",
    "OctalValuesRule",
]
