#!/usr/bin/env python

"""
    Biblioteca, a small library lending REST API

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

__version__ = '1.0.0'
