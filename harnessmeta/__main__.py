"""
CLI entry point for harness metadata.
"""
import sys
from rich.console import Console
from .cli import cli
from .types import ExitCode

console = Console(stderr=True)

def main():
    try:
        cli()
    except Exception as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(ExitCode.LOAD_ERROR.value)

if __name__ == "__main__":
    main()
