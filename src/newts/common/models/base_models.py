# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import BaseModel, ConfigDict


class NewtsBaseModel(BaseModel):
    """Base model for all pydantic models used by Newts."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")
