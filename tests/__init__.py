"""Test package for nhl_salaries."""
