"""csssupports - parse, combine, prefix and print CSS ``@supports`` conditions."""

from csssupports.condition import ConditionKind, SupportsCondition, parse_supports_condition
from csssupports.config import MinifyOptions, PrinterOptions
from csssupports.errors import MinifyError, ParseError
from csssupports.printer import Location, Mapping, Printer
from csssupports.properties import PropertyId
from csssupports.rules import CssRuleList, StyleRule, SupportsRule, UnknownAtRule
from csssupports.stylesheet import StyleSheet, ToCssResult, parse_stylesheet
from csssupports.targets import Browsers
from csssupports.vendor_prefix import VendorPrefix

__version__ = "0.1.0"

__all__ = [
    "Browsers",
    "ConditionKind",
    "CssRuleList",
    "Location",
    "Mapping",
    "MinifyError",
    "MinifyOptions",
    "ParseError",
    "Printer",
    "PrinterOptions",
    "PropertyId",
    "StyleRule",
    "StyleSheet",
    "SupportsCondition",
    "SupportsRule",
    "ToCssResult",
    "UnknownAtRule",
    "VendorPrefix",
    "parse_stylesheet",
    "parse_supports_condition",
]
