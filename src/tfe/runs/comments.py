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

from __future__ import annotations

from tfe.common import BaseAPIClient, Page, RequestMethod
from tfe.common.utils import require_id

from .data import Comment, CommentCreateOptions, CommentListOptions

__all__ = ["CommentAPIClient"]


class CommentAPIClient(BaseAPIClient):
    """Client for the comments on runs."""

    async def list(self, run_id: str, options: CommentListOptions | None = None) -> Page[Comment]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "runs/{run_id}/comments",
            path_params={"run_id": require_id("run_id", run_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[Comment]},
        )

    async def create(self, run_id: str, options: CommentCreateOptions) -> Comment:
        """Add a comment to a run.

        :param run_id: The run ID.
        :param options: The comment. The body is required.

        :return: The created comment.
        """
        require_id("run_id", run_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "runs/{run_id}/comments",
            path_params={"run_id": run_id},
            body=options,
            response_types_map={"201": Comment},
        )

    async def read(self, comment_id: str) -> Comment:
        return await self._connector.call_api(
            RequestMethod.GET,
            "comments/{comment_id}",
            path_params={"comment_id": require_id("comment_id", comment_id)},
            response_types_map={"200": Comment},
        )
