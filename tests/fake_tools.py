"""Fake latexmk and latexdiff-vc executables for end-to-end tests.

Both append one JSON line per invocation to a log file, so tests can check
which tools ran, with which arguments and in which directory.
"""

import json
import os
import shlex
import sys
from pathlib import Path

RULE_LINE = "Latexmk: applying rule 'pdflatex'...\n"
UP_TO_DATE_LINE = "Latexmk: All targets (main.pdf) are up-to-date\n"

LATEXMK_SCRIPT = r'''
import json, os, sys
from pathlib import Path

CONFIG = json.loads(CONFIG_JSON)
args = sys.argv[1:]
with open(CONFIG["log"], "a") as f:
    f.write(json.dumps({"tool": "latexmk", "args": args, "cwd": os.getcwd()}) + "\n")

doc = Path(args[-1])
outdir = Path(next(a for a in args if a.startswith("-outdir="))[len("-outdir="):])
mode = "diff" if doc.name.endswith(CONFIG["postfix"]) else "main"
behavior = CONFIG[mode]

if mode == "diff" and not Path(str(doc) + ".tex").exists():
    sys.stderr.write("missing " + str(doc) + ".tex\n")
    sys.exit(2)

for line in behavior["stdout"]:
    sys.stdout.write(line)
    sys.stdout.flush()
sys.stderr.write(behavior["stderr"])
if behavior["returncode"] == 0:
    (outdir / (doc.name + ".pdf")).write_bytes(b"%PDF-1.5 " + doc.name.encode() + b"\n")
    if "-synctex=1" in args:
        (outdir / (doc.name + ".synctex.gz")).write_bytes(b"synctex")
sys.exit(behavior["returncode"])
'''

LATEXDIFF_VC_SCRIPT = r'''
import json, os, sys
from pathlib import Path

CONFIG = json.loads(CONFIG_JSON)
args = sys.argv[1:]
with open(CONFIG["log"], "a") as f:
    f.write(json.dumps({"tool": "latexdiff-vc", "args": args, "cwd": os.getcwd()}) + "\n")

sys.stderr.write(CONFIG["stderr"])
if CONFIG["returncode"] != 0:
    sys.exit(CONFIG["returncode"])

diff_dir = Path(args[args.index("-d") + 1])
tex = args[-1]
diff_dir.mkdir(exist_ok=True)
(diff_dir / tex).write_text("\\DIFadd{changed}\n")
'''


def _write_script(path: Path, body: str, config: dict) -> Path:
    # sh wrapper: long interpreter paths break shebang lines
    script = path.with_suffix(".py")
    script.write_text(f"CONFIG_JSON = {json.dumps(json.dumps(config))}\n" + body)
    path.write_text(f"#!/bin/sh\nexec {shlex.quote(sys.executable)} {shlex.quote(str(script))} \"$@\"\n")
    path.chmod(0o755)
    return path


def latexmk_run(stdout=(), returncode=0, stderr="") -> dict:
    return {"stdout": list(stdout), "returncode": returncode, "stderr": stderr}


def write_latexmk(bin_dir: Path, log: Path, main: dict, diff: dict | None = None, postfix: str = "-diff") -> Path:
    """Write a fake latexmk; `main`/`diff` describe the two kinds of run."""
    config = {
        "log": str(log),
        "postfix": postfix,
        "main": main,
        "diff": diff or latexmk_run(),
    }
    return _write_script(bin_dir / "latexmk", LATEXMK_SCRIPT, config)


def write_latexdiff_vc(bin_dir: Path, log: Path, returncode: int = 0, stderr: str = "") -> Path:
    config = {"log": str(log), "returncode": returncode, "stderr": stderr}
    return _write_script(bin_dir / "latexdiff-vc", LATEXDIFF_VC_SCRIPT, config)


def read_log(log: Path) -> list[dict]:
    if not log.exists():
        return []
    return [json.loads(line) for line in log.read_text().splitlines() if line]


def tools_run(log: Path) -> list[str]:
    return [entry["tool"] for entry in read_log(log)]


POSIX_ONLY = os.name != "posix"
