# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Web host for the clock widget."""
