"""
timelang Renderer Package

Turns AST nodes back into canonical timelang text.
"""

from .renderer import Renderer, render

__all__ = ["Renderer", "render"]
