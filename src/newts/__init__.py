# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Newts: resampling and aggregation of irregular time-series samples."""

__version__ = "0.1.0"
