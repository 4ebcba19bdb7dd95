# -*- coding: utf-8 -*-
"""NEST FEST registration, AI pitch coaching and admin API."""

__version__ = "0.1.0"
