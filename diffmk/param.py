"""Resolved run configuration built once from the parsed command line."""

import argparse
from dataclasses import dataclass
from pathlib import Path

from diffmk import file_utils
from diffmk.errors import CurrentDirFailed
from diffmk.latexdiff import LatexdiffOpts
from diffmk.latexdiff_vc import LatexdiffVc, LatexdiffVcOpts
from diffmk.latexmk import Latexmk, LatexmkOpts

DEFAULT_DIFF_NAME = "diff"
TEMP_DIR_NAME = ".temp"


@dataclass(frozen=True)
class Param:
    dir: Path  # directory containing the document
    docfile: str  # document name without directory or extension

    tmpdir: Path  # latexmk -outdir/-auxdir
    outdir: Path  # where the final PDF is delivered

    async_diff: bool
    diff_only: bool

    latexmk: Path
    latexdiff_vc: Path

    diff_docfile: str  # docfile + postfix; never equal to docfile
    diff_dir_name: str

    latexdiff_opts: LatexdiffOpts
    latexdiff_vc_opts: LatexdiffVcOpts
    latexmk_opts: LatexmkOpts

    @classmethod
    def from_args(cls, args: argparse.Namespace, cwd: Path | None = None) -> "Param":
        """Resolve paths and defaults.

        Args:
            args: Namespace from cli.build_parser().
            cwd: Directory a relative document path is resolved against
                (default: the current directory).

        Raises:
            CurrentDirFailed: cwd was not given and could not be determined.
            FileOperationError: --tmpdir or --outdir could not be created.
        """
        # doc is dir/stem, not a real file path
        doc = Path(args.doc)
        if not doc.is_absolute():
            if cwd is None:
                try:
                    cwd = Path.cwd()
                except OSError as e:
                    raise CurrentDirFailed(str(e)) from e
            doc = Path(cwd) / doc
        dir = doc.parent
        docfile = doc.name

        diff_dir_name = args.diff_name or DEFAULT_DIFF_NAME
        diff_postfix = args.diff_postfix if args.diff_postfix is not None else f"-{diff_dir_name}"

        if args.tmpdir is None:
            tmpdir = dir / TEMP_DIR_NAME
        else:
            file_utils.create_dir_all(args.tmpdir)
            tmpdir = file_utils.canonicalize(args.tmpdir)

        if args.outdir is None:
            outdir = dir
        else:
            file_utils.create_dir_all(args.outdir)
            outdir = file_utils.canonicalize(args.outdir)

        return cls(
            dir=dir,
            docfile=docfile,
            tmpdir=tmpdir,
            outdir=outdir,
            async_diff=args.async_diff,
            diff_only=args.diff_only,
            latexmk=args.latexmk or file_utils.env_path("DIFFMK_LATEXMK", "latexmk"),
            latexdiff_vc=args.latexdiff_vc or file_utils.env_path("DIFFMK_LATEXDIFF_VC", "latexdiff-vc"),
            diff_docfile=docfile + diff_postfix,
            diff_dir_name=diff_dir_name,
            latexdiff_opts=LatexdiffOpts.from_namespace(args),
            latexdiff_vc_opts=LatexdiffVcOpts.from_namespace(args),
            latexmk_opts=LatexmkOpts.from_namespace(args),
        )

    @property
    def diff_outdir(self) -> Path:
        return self.dir / self.diff_dir_name

    def latexmk_runner(self) -> Latexmk:
        """latexmk for the document itself."""
        return Latexmk(
            executable=self.latexmk,
            dir=self.dir,
            docfile=self.docfile,
            tmpdir=self.tmpdir,
            outdir=self.outdir,
            opts=self.latexmk_opts,
        )

    def latexmk_for_diff(self) -> Latexmk:
        """latexmk for the relocated diff source, which lives in tmpdir."""
        return Latexmk(
            executable=self.latexmk,
            dir=self.tmpdir,
            docfile=self.diff_docfile,
            tmpdir=self.tmpdir,
            outdir=self.diff_outdir,
            opts=self.latexmk_opts,
        )

    def latexdiff_vc_runner(self) -> LatexdiffVc:
        return LatexdiffVc(
            executable=self.latexdiff_vc,
            dir=self.dir,
            docfile=self.docfile,
            diff_dir_name=self.diff_dir_name,
            diff_docfile=self.diff_docfile,
            tmpdir=self.tmpdir,
            verbose=self.latexmk_opts.verbose,
            opts=self.latexdiff_vc_opts,
            latexdiff_opts=self.latexdiff_opts,
        )
