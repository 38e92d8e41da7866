"""
Command-line interface for livepair.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from .constants import PROGRAM, QUARANTINE_NAME, get_console
from .core import LivePhotoOrganizer, setup_logging
from .exceptions import LivePairError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    from . import __version__

    parser = argparse.ArgumentParser(
        description="Repair and organize Live Photo pairs from a camera folder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  {PROGRAM} /Volumes/CARD/DCIM/100APPLE
  {PROGRAM} ~/Import/100APPLE --quarantine ~/Import/Other --dest-root ~/Import
        """
    )

    parser.add_argument(
        "source",
        help="Flat directory of camera captures to repair (e.g. DCIM/100APPLE)"
    )
    parser.add_argument(
        "--quarantine", "-q", metavar="DIR",
        help=f"Directory receiving unpaired and unrecognized files "
             f"(default: <source parent>/{QUARANTINE_NAME})"
    )
    parser.add_argument(
        "--dest-root", "-d", metavar="DIR",
        help="Directory holding the versioned NNNAPPLE folders (default: <source parent>)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version", "-V", action="version", version=__version__,
        help=f"Display the version number of {PROGRAM} and exit"
    )

    return parser


def show_processing_plan(source: Path, quarantine: Path, dest_root: Path,
                         console: Console) -> None:
    """Display the processing plan before execution."""
    console.print("\n[bold]Processing Plan:[/bold]")
    console.print(f"  Source:      [blue]{source}[/blue]")
    console.print(f"  Quarantine:  [blue]{quarantine}[/blue]")
    console.print(f"  Destination: [blue]{dest_root}[/blue]")
    console.print()


def main(root_dir: Optional[Path] = None) -> int:
    """Main entry point.

    Args:
        root_dir: Optional directory for run history (for testing)
    """
    parser = create_parser()
    args = parser.parse_args()

    source = Path(args.source).expanduser().resolve()
    if not source.exists():
        print(f"Error: Source directory does not exist: {source}")
        return 1
    if not source.is_dir():
        print(f"Error: Source is not a directory: {source}")
        return 1

    quarantine = (Path(args.quarantine).expanduser().resolve() if args.quarantine
                  else source.parent / QUARANTINE_NAME)
    dest_root = (Path(args.dest_root).expanduser().resolve() if args.dest_root
                 else source.parent)

    if quarantine == source:
        print("Error: Quarantine directory must differ from the source directory")
        return 1

    console = get_console()
    setup_logging(verbose=args.verbose)

    show_processing_plan(source=source, quarantine=quarantine, dest_root=dest_root,
                         console=console)

    try:
        organizer = LivePhotoOrganizer(source=source, quarantine_dir=quarantine,
                                       dest_root=dest_root, root_dir=root_dir)
        organizer.run()
        organizer.print_summary()
        console.print("\n[green]✓ Processing completed successfully![/green]")
        return 0

    except KeyboardInterrupt:
        console.print("\n[red]Operation cancelled by user[/red]")
        return 1
    except (LivePairError, OSError) as e:
        console.print(f"\n[red]Fatal error: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
