"""CLI package for the carbon footprint and electricity bill calculators."""
