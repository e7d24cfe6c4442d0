"""latexdiff-vc -> move source -> latexmk -> deliver the diff PDF.

Every generated file carries the diff postfix, so this can run while the
primary latexmk is still writing into the same tmpdir.
"""

import sys
import time

from diffmk.param import Param


def run_diff_pipeline(param: Param, inherit_output: bool = False) -> None:
    """Produce <dir>/<diff_name>/<doc><postfix>.pdf.

    Args:
        param: Run configuration.
        inherit_output: Let the tools write to our stderr instead of
            capturing their stderr (diff-only runs, where nobody else
            reports failures).

    Raises:
        DiffmkError: The first failing step; later steps are skipped.
    """
    latexdiff_vc = param.latexdiff_vc_runner()
    start = time.time()
    latexdiff_vc.run(inherit_output=inherit_output)
    elapsed_ms = (time.time() - start) * 1000
    print(f"latexdiff-vc took {elapsed_ms:.0f} ms", file=sys.stderr, flush=True)
    latexdiff_vc.relocate_tex()

    latexmk = param.latexmk_for_diff()
    latexmk.run(inherit_output=inherit_output)
    latexmk.relocate()
