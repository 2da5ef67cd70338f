"""Shared argcomplete completers for CLI operations."""

from __future__ import annotations

from argcomplete.completers import DirectoriesCompleter, FilesCompleter

EXECUTABLE_SUFFIXES = ("elf", "bin", "prx", "sprx")
PACKAGE_SUFFIXES = ("pkg",)

complete_executables = FilesCompleter(allowednames=EXECUTABLE_SUFFIXES, directories=True)
complete_packages = FilesCompleter(allowednames=PACKAGE_SUFFIXES, directories=True)
complete_directories = DirectoriesCompleter()
