#!/usr/bin/env python3
"""
Console Output Utilities

Provides consistent, colorful console output formatting across the application.
Uses the rich library for terminal output with colors, panels and tables.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
import numpy as np
from typing import Dict, Optional, Any

# Create global console instance
console = Console()

# Color scheme
COLORS = {
    "primary": "cyan",
    "secondary": "blue",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "info": "white",
    "accent": "magenta",
    "muted": "dim white"
}


class ConsoleOutput:
    """Centralized console output manager with consistent styling."""

    def __init__(self, console_instance: Optional[Console] = None):
        self.console = console_instance or console

    def header(self, title: str, subtitle: Optional[str] = None) -> None:
        """Print a styled header section."""
        content = f"[bold {COLORS['primary']}]{title}[/bold {COLORS['primary']}]"
        if subtitle:
            content += f"\n[{COLORS['muted']}]{subtitle}[/{COLORS['muted']}]"

        panel = Panel(
            content,
            border_style=COLORS['primary'],
            box=box.DOUBLE,
            padding=(1, 2)
        )
        self.console.print(panel)

    def subheader(self, title: str) -> None:
        """Print a styled subheader."""
        self.console.print(f"\n[bold {COLORS['secondary']}]▶ {title}[/bold {COLORS['secondary']}]")

    def success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[{COLORS['success']}]✓[/{COLORS['success']}] {message}")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[{COLORS['warning']}]⚠[/{COLORS['warning']}] {message}")

    def error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[{COLORS['error']}]✗[/{COLORS['error']}] {message}")

    def info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[{COLORS['info']}]ℹ[/{COLORS['info']}] {message}")

    def progress_info(self, message: str) -> None:
        """Print a progress-related info message."""
        self.console.print(f"[{COLORS['accent']}]⟳[/{COLORS['accent']}] {message}")

    def stats_table(self, title: str, data: Dict[str, Any]) -> None:
        """Display statistics in a formatted table."""
        table = Table(title=f"[bold {COLORS['primary']}]{title}[/bold {COLORS['primary']}]",
                      show_header=True, header_style=f"bold {COLORS['secondary']}")
        table.add_column("Metric", style=COLORS['info'])
        table.add_column("Value", style=f"bold {COLORS['success']}")

        for key, value in data.items():
            if isinstance(value, float):
                if value >= 1000:
                    formatted_value = f"{value:,.1f}"
                else:
                    formatted_value = f"{value:.2f}"
            elif isinstance(value, int):
                formatted_value = f"{value:,}"
            else:
                formatted_value = str(value)
            table.add_row(key, formatted_value)

        self.console.print(table)

    def grid_info(self, grid, valid_cells: Optional[int] = None) -> None:
        """Display elevation grid information."""
        samples = np.asarray(grid.samples, dtype=np.float64)
        grid_stats = {
            "Grid Size": f"{grid.width} × {grid.height}",
            "Total Samples": grid.width * grid.height,
            "Sample Range": f"{float(samples.min()):.1f} to {float(samples.max()):.1f}",
        }
        if valid_cells is not None:
            total = max(1, grid.width * grid.height)
            grid_stats["Valid Cells"] = f"{valid_cells:,} ({valid_cells / total * 100:.1f}%)"

        self.stats_table("Elevation Grid", grid_stats)

    def mesh_stats(self, title: str, meshes: Dict[str, Any]) -> None:
        """Display vertex/face counts for a set of named meshes."""
        table = Table(title=f"[bold {COLORS['primary']}]{title}[/bold {COLORS['primary']}]",
                      show_header=True, header_style=f"bold {COLORS['secondary']}")
        table.add_column("Mesh", style=COLORS['info'])
        table.add_column("Vertices", style=f"bold {COLORS['success']}", justify="right")
        table.add_column("Faces", style=f"bold {COLORS['success']}", justify="right")

        for name, mesh in meshes.items():
            if mesh is None:
                table.add_row(name, "-", "-")
            else:
                table.add_row(name, f"{mesh.vertex_count:,}", f"{mesh.face_count:,}")

        self.console.print(table)

    def file_saved(self, filename: str, file_type: str = "file") -> None:
        """Indicate a file has been saved."""
        self.success(f"{file_type.title()} saved: [bold]{filename}[/bold]")

    def print_section_divider(self) -> None:
        """Print a visual section divider."""
        self.console.print(f"\n[{COLORS['muted']}]{'─' * 60}[/{COLORS['muted']}]\n")


# Global console output instance
output = ConsoleOutput()
