"""Test suite for Shell AI."""
