"""
Idempotence Validator — Checks a resolved line is stable.

Running the passes again over their own output must not change it.
"""

from typing import Callable, Sequence

from tdr.core.context import TransformContext, TransformRequest
from tdr.core.contracts import Validator


class IdempotenceValidator(Validator):
    """
    Validates that resolution is idempotent.

    The passes are re-run over the resolved text in a fresh context
    and the result is compared with the original output.
    """

    def __init__(self, passes: Sequence[Callable[[TransformContext], TransformContext]]):
        self._passes = list(passes)

    @property
    def name(self) -> str:
        return "idempotence"

    def validate(self, ctx: TransformContext) -> list[str]:
        rerun = TransformContext.from_request(TransformRequest(text=ctx.text))
        for pass_fn in self._passes:
            rerun = pass_fn(rerun)

        if rerun.text == ctx.text:
            return []
        return [f"Re-resolving the output changed it: {ctx.text!r} -> {rerun.text!r}"]
