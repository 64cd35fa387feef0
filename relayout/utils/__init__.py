#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""RELAYOUT utilities package.

Common helpers for file handling, configuration, schema validation and
verification reporting.
"""
