# -*- coding: utf-8 -*-
"""ResxSync core services: file format, discovery, search and translation."""
