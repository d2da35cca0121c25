"""
Banner display for gbx-cli
"""

from typing import Optional

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text


def create_compact_banner() -> str:
    """Create the ASCII banner"""
    return """
 ██████╗ ██████╗ ██╗  ██╗
██╔════╝ ██╔══██╗╚██╗██╔╝
██║  ███╗██████╔╝ ╚███╔╝
██║   ██║██╔══██╗ ██╔██╗
╚██████╔╝██████╔╝██╔╝ ██╗
 ╚═════╝ ╚═════╝ ╚═╝  ╚═╝
"""


def display_welcome_banner(console: Optional[Console] = None, version: str = "1.0.0"):
    """Display the sign-up welcome banner"""
    console = console or Console()

    text = Text(create_compact_banner(), style="bold grey70")
    text.append("\nWelcome to GBX Sign-Up CLI", style="bold bright_white")
    text.append(f"\nv{version}", style="grey50")

    console.print(Panel(Align.center(text), border_style="grey50", padding=(0, 2)))
