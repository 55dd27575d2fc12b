"""Render a program's type model as PlantUML class diagrams."""

__version__ = "0.3.0"
