"""Calculators that make up the sprint health pipeline."""
