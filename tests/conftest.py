"""Shared test setup for scaffolder tests."""

import os
import sys

# Make the hand-written fakes in tests/fakes/ importable from every test area.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "fakes"))
