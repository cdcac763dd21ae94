"""Command vocabulary and the raw-input interpreter."""

from .interpreter import Command, CommandType, instructions, interpret

__all__ = ["Command", "CommandType", "instructions", "interpret"]
