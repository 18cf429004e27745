# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum


class PendingAlert(TypedDict):
    id: str
    fire_at: pendulum.DateTime
