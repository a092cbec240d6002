from textwrap import dedent

import libcst as cst


def parse(code: str) -> cst.Module:
    return cst.parse_module(dedent(code).lstrip("\n"))
