#  Copyright © 2025 Bentley Systems, Incorporated
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#      http://www.apache.org/licenses/LICENSE-2.0
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""Logging helpers for the TFE SDK.

All loggers created by the SDK are children of the `tfe` logger, so applications can configure SDK logging in one
place. The SDK never attaches handlers itself.
"""

import logging

__all__ = ["getLogger"]

_ROOT_LOGGER_NAME = "tfe"


def getLogger(name: str) -> logging.Logger:
    """Get a logger that is a child of the root `tfe` logger.

    :param name: The logger name, relative to the `tfe` root logger.

    :return: The logger instance.
    """
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
