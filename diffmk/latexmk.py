"""latexmk invocation: option flags, command construction, artifact relocation."""

import argparse
import subprocess
from dataclasses import dataclass, fields
from pathlib import Path

from diffmk import file_utils
from diffmk.errors import CommandFailed
from diffmk.process import run_tool


@dataclass(frozen=True)
class LatexmkOpts:
    """Options forwarded to latexmk."""
    xelatex: bool = False
    lualatex: bool = False
    bibtex: bool = False
    biber: bool = False
    nobibtex: bool = False
    synctex: bool = False
    silent: bool = False
    quiet: bool = False
    verbose: bool = False
    commands: bool = False

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "LatexmkOpts":
        return cls(**{f.name: getattr(args, f.name) for f in fields(cls)})

    def args(self) -> list[str]:
        """Translate to latexmk flags."""
        args = ["-halt-on-error", "-file-line-error"]

        # Engine (pdflatex when neither is set)
        if self.xelatex:
            args.append("-xelatex")
        elif self.lualatex:
            args.append("-lualatex")

        # Bibliography
        if self.bibtex:
            args.append("-bibtex")
        elif self.biber:
            args.append("-biber")
        elif self.nobibtex:
            args.append("-nobibtex")

        # Output
        if self.silent:
            args.append("-silent")
        elif self.quiet:
            args.append("-quiet")
        elif self.verbose:
            args.append("-verbose")

        if self.commands:
            args.append("-commands")
        if self.synctex:
            args.append("-synctex=1")
        return args


def add_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("latexmk options")

    engine = group.add_mutually_exclusive_group()
    engine.add_argument("--xelatex", action="store_true", help="Use XeLaTeX as the LaTeX engine")
    engine.add_argument("--lualatex", action="store_true", help="Use LuaLaTeX as the LaTeX engine")

    bib = group.add_mutually_exclusive_group()
    bib.add_argument("--bibtex", action="store_true", help="Use BibTeX for bibliography processing")
    bib.add_argument("--biber", action="store_true", help="Use Biber for bibliography processing")
    bib.add_argument("--nobibtex", action="store_true", help="Disable bibliography processing entirely")

    group.add_argument("--synctex", action="store_true", help="Enable SyncTeX generation for editor synchronization")

    output = group.add_mutually_exclusive_group()
    output.add_argument("--silent", action="store_true", help="Suppress all output except errors")
    output.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    output.add_argument("--verbose", action="store_true", help="Increase output verbosity with detailed information")

    group.add_argument("--commands", action="store_true", help="Display system commands being executed")


@dataclass(frozen=True)
class Latexmk:
    """One latexmk run: build dir/docfile.tex in tmpdir, deliver to outdir."""
    executable: Path
    dir: Path
    docfile: str
    tmpdir: Path
    outdir: Path
    opts: LatexmkOpts

    @property
    def pdf_name(self) -> str:
        return f"{self.docfile}.pdf"

    @property
    def synctex_name(self) -> str:
        return f"{self.docfile}.synctex.gz"

    def command(self) -> list[str]:
        """Build the latexmk command line, creating tmpdir first."""
        file_utils.create_dir_all(self.tmpdir)
        return [
            str(self.executable),
            *self.opts.args(),
            f"-outdir={self.tmpdir}",
            f"-auxdir={self.tmpdir}",
            str(self.dir / self.docfile),
        ]

    def spawn(self) -> subprocess.Popen:
        """Start latexmk with stdout piped to us and stderr shown to the user."""
        cmd = self.command()
        try:
            return subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=None)
        except OSError as e:
            raise CommandFailed(cmd, str(e)) from e

    def run(self, inherit_output: bool = False) -> None:
        run_tool(self.command(), inherit_output=inherit_output)

    def relocate(self) -> None:
        """Copy the PDF (and SyncTeX file, if enabled) from tmpdir to outdir."""
        file_utils.copy(self.tmpdir / self.pdf_name, self.outdir / self.pdf_name)
        if self.opts.synctex:
            file_utils.copy(self.tmpdir / self.synctex_name, self.outdir / self.synctex_name)
