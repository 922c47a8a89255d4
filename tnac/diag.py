"""Diagnostic message builders used across parsing, compilation and runtime."""

from __future__ import annotations

import os

_WRONG_ARG_N = "Too {} arguments. Expected {}, got {}"
_FAILED_IMPORT = "Unable to import module '{}'"
_CIRCULAR_IMPORT = "Circular reference between modules '{}' and '{}'"
_SELF_IMPORT = "Illegal self import in module '{}'"
_WRONG_CMD_ARG_TYPE = "Command argument {} has an unexpected type"
_WRONG_CMD_ARG = "Unrecognised argument '{}' at index {}"
_UNKNOWN_CLI_ARG = "Unknown cli arg '{}'"
_FILE_ERR = "Failed to {} file '{}'. Reason: '{}'"
_MODULE_ERROR = "Compilation stopped due to errors in module '{}'"
_CONDITION_SAME = "The condition is always {}"
_LOGICAL_SAME = "The logical '{}' expression is always {}. Check the {} operand"


def _quoted(what: str) -> str:
    """Single characters are quoted, longer descriptions are not."""
    return f"'{what}'" if len(what) == 1 else what


def _expected_after(what: str, after: str) -> str:
    return f"Expected '{what}' after {after}"


def expected(what: str, more: str | None = None) -> str:
    """'Expected <what>' with an optional trailing remark."""
    subject = _quoted(what)
    if more is None:
        return f"Expected {subject}"
    return f"Expected {subject} {more}"


# Compilation

def wrong_arg_num(wanted: int, got: int) -> str:
    quantity = "many" if wanted < got else "few"
    return _WRONG_ARG_N.format(quantity, wanted, got)


def compilation_stopped(module_name: str | None = None) -> str:
    if module_name is None:
        return "Compilation stopped due to errors"
    return _MODULE_ERROR.format(module_name)


def condition_same(value: bool) -> str:
    return _CONDITION_SAME.format("true" if value else "false")


def logical_same(op: str, is_lhs: bool, value: bool) -> str:
    operand = "left" if is_lhs else "right"
    return _LOGICAL_SAME.format(op, "true" if value else "false", operand)


def unreachable() -> str:
    return "Unreachable code"


def ret_here() -> str:
    return "The related ret expression is here"


def all_branches_return() -> str:
    return "All branches of the conditional expression return"


# Parsing

def expected_expr() -> str:
    return expected("expression")


def expected_args() -> str:
    return expected("argument list")


def expected_assignable() -> str:
    return expected("an assignable object")


def expected_id() -> str:
    return expected("identifier")


def expected_init() -> str:
    return expected("initialisation")


def expected_single_id() -> str:
    return expected("a single identifier")


def expected_expr_sep() -> str:
    return expected(":", "or EOL")


def expected_func_end() -> str:
    return _expected_after(";", "function definition")


def expected_cond_end() -> str:
    return _expected_after(";", "conditional")


def expected_pattern_end() -> str:
    return _expected_after(";", "pattern body")


def expected_matcher_def() -> str:
    return _expected_after("->", "condition matcher")


def undef_id() -> str:
    return "Undefined identifier"


def var_not_allowed() -> str:
    return "Referencing a variable is not allowed here"


def scope_ref_nodot() -> str:
    return "References to intermediate scopes can only be used as lhs of a dot expression"


def invalid_decl() -> str:
    return "Invalid declaration"


def invalid_lambda() -> str:
    return "Invalid anonimous function definition"


def param_redef() -> str:
    return "Function parameter redifinition"


def name_redef() -> str:
    return "Name redifinition"


def expr_not_allowed() -> str:
    return "Expression is not allowed here"


def empty_cond() -> str:
    return "Condition can't be empty"


def empty_import() -> str:
    return "Expected import name"


def import_failed(name: str) -> str:
    return _FAILED_IMPORT.format(name)


def circular_ref(last: str, cur: str) -> str:
    return _CIRCULAR_IMPORT.format(last, cur)


def self_import(module_name: str) -> str:
    return _SELF_IMPORT.format(module_name)


def lit_after_dot() -> str:
    return "Literal is not allowed as an accessor after '.'"


# Commands

def unknown_cmd() -> str:
    return "Unknown command"


def wrong_cmd_arg(idx: int, value: str | None = None) -> str:
    """Report a bad command argument; ``idx`` is zero-based, the message is one-based."""
    if value is None:
        return _WRONG_CMD_ARG_TYPE.format(idx + 1)
    return _WRONG_CMD_ARG.format(value, idx + 1)


# Runtime

def unknown_cli_arg(arg: str) -> str:
    return _UNKNOWN_CLI_ARG.format(arg)


def file_load_failure(path: str | os.PathLike, reason: str) -> str:
    return _FILE_ERR.format("load", os.fspath(path), reason)


def file_write_failure(path: str | os.PathLike, reason: str) -> str:
    return _FILE_ERR.format("write to", os.fspath(path), reason)