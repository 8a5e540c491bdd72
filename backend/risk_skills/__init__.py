"""Deterministic NTP 330 skills: calculator, validator, sorter and report builder."""
