"""
Combat system module for the Wild Combat simulator.

This module handles combat resolution: damage tables, enemy abilities,
round orchestration, the session loop and batch statistics.
"""
