from westwood.core.parse import load_query_source
from westwood.core.query import QueryHelper
from westwood.core.source import SourceInfo
from westwood.core.tree import is_single_space_between
from westwood.models import Diagnostic, RuleDescription

DESCRIPTION = RuleDescription(
    group_number=3,
    letter="B",
    code="III:B",
    name="OperatorSpacing",
    description="operators must be surrounded by consistent spacing",
)


class Rule03b:
    def describe(self) -> RuleDescription:
        return DESCRIPTION

    def check(self, source: SourceInfo) -> list[Diagnostic]:
        diagnostics = self._check_binary(source)
        diagnostics.extend(self._check_unary(source))
        diagnostics.extend(self._check_array(source))
        diagnostics.extend(self._check_field(source))
        return diagnostics

    def _report(self, source: SourceInfo, message: str, start: int, end: int) -> Diagnostic:
        return Diagnostic(rule=DESCRIPTION, message=message).with_violation(
            source.span(start, end, "Incorrect spacing here")
        )

    def _check_binary(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule03b_binary"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        for qmatch in helper.matches():
            left = helper.expect_node(qmatch, "prev")
            op = helper.expect_node(qmatch, "binary-operator")
            right = helper.expect_node(qmatch, "next")

            # Operands on another line are left to the wrapped-line indentation check.
            left_bad = left.end_point[0] == op.start_point[0] and not is_single_space_between(
                left, op, source.code
            )
            right_bad = op.end_point[0] == right.start_point[0] and not is_single_space_between(
                op, right, source.code
            )
            if left_bad and right_bad:
                message = "Expected a single space on each side of binary operator"
                start, end = left.end_byte, right.start_byte
            elif left_bad:
                message = "Expected a single space before binary operator"
                start, end = left.end_byte, op.end_byte
            elif right_bad:
                message = "Expected a single space after binary operator"
                start, end = op.start_byte, right.start_byte
            else:
                continue
            diagnostics.append(self._report(source, message, start, end))
        return diagnostics

    def _check_unary(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule03b_unary"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        for qmatch in helper.matches():
            op = helper.expect_node(qmatch, "unary-operator")
            operand = helper.expect_node(qmatch, "next")
            if op.end_byte != operand.start_byte:
                diagnostics.append(
                    self._report(source, "Expected no space after unary operator", op.end_byte, operand.start_byte)
                )
        return diagnostics

    def _check_array(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule03b_array"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        for qmatch in helper.matches():
            array = helper.expect_node(qmatch, "prev")
            bracket = helper.expect_node(qmatch, "array-bracket-left")
            if array.end_byte != bracket.start_byte:
                diagnostics.append(
                    self._report(
                        source, "Expected no space before array subscript", array.end_byte, bracket.start_byte
                    )
                )
        return diagnostics

    def _check_field(self, source: SourceInfo) -> list[Diagnostic]:
        helper = QueryHelper(load_query_source("rule03b_field"), source.tree, source.code)
        diagnostics: list[Diagnostic] = []
        for qmatch in helper.matches():
            left = helper.expect_node(qmatch, "prev")
            op = helper.expect_node(qmatch, "field-operator")
            right = helper.expect_node(qmatch, "next")
            left_bad = left.end_byte != op.start_byte
            right_bad = op.end_byte != right.start_byte
            if left_bad and right_bad:
                message = "Expected no space around field access operator"
                start, end = left.end_byte, right.start_byte
            elif left_bad:
                message = "Expected no space before field access operator"
                start, end = left.end_byte, op.start_byte
            elif right_bad:
                message = "Expected no space after field access operator"
                start, end = op.end_byte, right.start_byte
            else:
                continue
            diagnostics.append(self._report(source, message, start, end))
        return diagnostics
