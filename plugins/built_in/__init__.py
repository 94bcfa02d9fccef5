# -*- coding: utf-8 -*-
"""Engines shipped with ResxSync."""
