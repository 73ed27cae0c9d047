"""
Kerf adjustment for laser cutting drawings.

Reads a DXF drawing, stitches its lines, arcs and circles into closed contours and
offsets every contour by the given amount, compensating for the material the laser
burns away. Contours that cannot be offset are written back unchanged.
"""

import argparse
import sys

APPLICATION_NAME = "kerfadjust"
APPLICATION_VERSION = "0.3.0"


parser = argparse.ArgumentParser(prog=APPLICATION_NAME, description=__doc__)
parser.add_argument("-V", "--version", action="store_true", help="kerfadjust version")
parser.add_argument("input", nargs="?", type=str, help="input dxf file")
parser.add_argument(
    "-o", "--output", type=str, default=None, help="output dxf file name"
)
parser.add_argument(
    "-k",
    "--kerf",
    type=float,
    default=None,
    help="amount to offset contours by, positive grows the contour",
)
parser.add_argument(
    "-t",
    "--tolerance",
    type=float,
    default=None,
    help="distance below which two end points are the same point",
)
parser.add_argument(
    "-s",
    "--strict",
    action="store_true",
    default=None,
    help="abort on unsupported or 3D entities",
)
parser.add_argument(
    "-D",
    "--dxf-version",
    type=str,
    default=None,
    help="DXF version of the output file (e.g. R2000, R2010)",
)
parser.add_argument(
    "-v", "--verbose", action="store_true", help="display verbose debugging"
)
parser.add_argument(
    "-A",
    "--disable-ansi",
    action="store_true",
    default=False,
    help="Disable ANSI colors",
)
parser.add_argument(
    "-X",
    "--nuke-settings",
    action="store_true",
    default=False,
    help="Don't load config file at startup",
)
parser.add_argument(
    "-S",
    "--save-settings",
    action="store_true",
    default=False,
    help="store the given kerf, tolerance, strict and dxf version as defaults",
)


def run(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)
    if args.version:
        print(f"{APPLICATION_NAME} {APPLICATION_VERSION}")
        return 0
    if args.input is None:
        parser.print_usage()
        return 2

    from kerfadjust.kernel import Kernel

    kernel = Kernel(
        APPLICATION_NAME,
        APPLICATION_VERSION,
        APPLICATION_NAME,
        ansi=not args.disable_ansi,
        ignore_settings=args.nuke_settings,
    )
    try:
        return _exe(kernel, args)
    finally:
        kernel()


def _exe(kernel, args):
    from kerfadjust.core.adjust import adjust_segments
    from kerfadjust.core.exceptions import KerfAdjustError
    from kerfadjust.core.geometry import EPSILON
    from kerfadjust.dxf.dxf_io import (
        DEFAULT_DXF_VERSION,
        DxfLoader,
        DxfSaver,
        offset_filename,
    )

    _ = kernel.translation
    console = kernel.channel("console")
    console.watch(print)
    kerf = kernel.channel("kerf", timestamp=True)
    if args.verbose:
        kerf.watch(print)

    # Command line values override the stored settings.
    for key, value in (
        ("kerf_amount", args.kerf),
        ("tolerance", args.tolerance),
        ("strict", args.strict),
        ("dxf_version", args.dxf_version),
    ):
        if value is not None:
            setattr(kernel, key, value)
    amount = kernel.setting(float, "kerf_amount", 0.0)
    tolerance = kernel.setting(float, "tolerance", EPSILON)
    strict = kernel.setting(bool, "strict", False)
    dxf_version = kernel.setting(str, "dxf_version", DEFAULT_DXF_VERSION)
    if args.save_settings:
        kernel.flush("kerf_amount", "tolerance", "strict", "dxf_version")
        kernel.write_configuration()

    if amount == 0:
        console(
            _("[yellow]Offsetting contours by 0 units, output equals input.[/yellow]"),
            ansi=True,
        )

    try:
        segments = DxfLoader.load(args.input, channel=kerf)
        console(_("There are {count} entities in the drawing").format(count=len(segments)))
        report = adjust_segments(
            segments, amount, tolerance=tolerance, strict=strict, channel=kerf
        )
    except KerfAdjustError as e:
        console(f"[red]{e}[/red]", ansi=True)
        return 1

    console(
        _("{closed} closed and {open} open contours, {adjusted} adjusted").format(
            closed=report.closed, open=report.open, adjusted=report.adjusted
        )
    )
    for index, error in report.failures:
        console(_("Contour {index} kept unchanged: {error}").format(index=index, error=error))

    output = args.output if args.output is not None else offset_filename(args.input)
    try:
        DxfSaver.save(output, report.segments, version=dxf_version, channel=kerf)
    except OSError as e:
        console(f"[red]{e}[/red]", ansi=True)
        return 1
    console(_("Saved {output}").format(output=output))
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
