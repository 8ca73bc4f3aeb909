#!/usr/bin/env python

"""
    Core module for Biblioteca: storage, registries and the loan lifecycle

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""
