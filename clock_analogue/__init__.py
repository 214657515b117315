# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
# clock-analogue - Analogue Clock Widget
"""
clock-analogue renders a self-contained analogue clock: hand geometry,
hour-marker layout and a live animation loop, with pygame and web hosts.
"""

__version__ = "1.0.0"
__author__ = "clock-analogue"
