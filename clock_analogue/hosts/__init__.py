# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Host implementations that attach and display the clock widget."""
