# SPDX-License-Identifier: MIT
"""Core configuration graph, resolution and flag generation."""
