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

import unittest

from tfe.common.exceptions import ClientValueError
from tfe.common.jsonapi import linkage, marshal, marshal_relationships, unmarshal_page, unmarshal_resource
from tfe.common.test_tools import utc_datetime
from tfe.organizations import ExecutionMode, Organization
from tfe.projects import Project
from tfe.runs import Run, RunCreateOptions, RunStatus, RunVariable
from tfe.variable_sets import VariableSet, VariableSetCreateOptions
from tfe.workspaces import Tag, Workspace, WorkspaceCreateOptions

from ..data import load_test_data


class TestMarshal(unittest.TestCase):
    def test_attributes_are_kebab_case(self) -> None:
        options = WorkspaceCreateOptions(name="my-workspace", auto_apply=True, working_directory="infra")
        self.assertEqual(
            {
                "data": {
                    "type": "workspaces",
                    "attributes": {"name": "my-workspace", "auto-apply": True, "working-directory": "infra"},
                }
            },
            marshal(options),
        )

    def test_enums_are_serialized_by_value(self) -> None:
        options = WorkspaceCreateOptions(name="ws", execution_mode=ExecutionMode.LOCAL)
        self.assertEqual("local", marshal(options)["data"]["attributes"]["execution-mode"])

    def test_relationships(self) -> None:
        options = RunCreateOptions(
            message="Queued by unit test",
            variables=[RunVariable(key="region", value='"us-east-1"')],
            workspace=Workspace(id="ws-123"),
        )
        self.assertEqual(
            {
                "data": {
                    "type": "runs",
                    "attributes": {
                        "message": "Queued by unit test",
                        "variables": [{"key": "region", "value": '"us-east-1"'}],
                    },
                    "relationships": {"workspace": {"data": {"type": "workspaces", "id": "ws-123"}}},
                }
            },
            marshal(options),
        )

    def test_to_many_relationship_with_tags_by_name(self) -> None:
        options = WorkspaceCreateOptions(
            name="ws",
            project=Project(id="prj-1"),
            tags=[Tag(name="prod"), Tag(id="tag-2")],
        )
        document = marshal(options)
        self.assertEqual(
            {
                "project": {"data": {"type": "projects", "id": "prj-1"}},
                "tags": {"data": [{"type": "tags", "attributes": {"name": "prod"}}, {"type": "tags", "id": "tag-2"}]},
            },
            document["data"]["relationships"],
        )

    def test_explicit_alias_is_used(self) -> None:
        options = VariableSetCreateOptions(name="shared", global_=True)
        self.assertEqual({"name": "shared", "global": True}, marshal(options)["data"]["attributes"])

    def test_marshal_relationships(self) -> None:
        self.assertEqual(
            {"data": [{"type": "workspaces", "id": "ws-1"}, {"type": "workspaces", "id": "ws-2"}]},
            marshal_relationships([Workspace(id="ws-1"), Workspace(id="ws-2")]),
        )

    def test_linkage_requires_an_identifier(self) -> None:
        with self.assertRaises(ClientValueError):
            linkage(Workspace())


class TestUnmarshal(unittest.TestCase):
    def setUp(self) -> None:
        self.workspace = unmarshal_resource(load_test_data("workspace.json"), Workspace)

    def test_attributes(self) -> None:
        self.assertEqual("ws-SihZTyXKfNXUWuUa", self.workspace.id)
        self.assertEqual("workspace-2", self.workspace.name)
        self.assertEqual(ExecutionMode.REMOTE, self.workspace.execution_mode)
        self.assertEqual(4, self.workspace.resource_count)
        self.assertEqual(["prod", "networking"], self.workspace.tag_names)
        self.assertEqual(utc_datetime(2021, 6, 3, 17, 50, 20, 307000), self.workspace.created_at)
        self.assertTrue(self.workspace.actions.is_destroyable)
        self.assertTrue(self.workspace.permissions.can_queue_run)

    def test_included_relationship_is_resolved(self) -> None:
        organization = self.workspace.organization
        self.assertIsInstance(organization, Organization)
        self.assertEqual("hashicorp", organization.id)
        self.assertEqual("admin@hashicorp.com", organization.email)

    def test_relationship_that_is_not_included_is_a_stub(self) -> None:
        self.assertEqual(Project(id="prj-7HWWPGY3fYxztELU"), self.workspace.project)

    def test_concrete_type_is_resolved_from_the_registry(self) -> None:
        current_run = self.workspace.current_run
        self.assertIsInstance(current_run, Run)
        self.assertEqual(RunStatus.APPLIED, current_run.status)
        self.assertTrue(current_run.is_finished())

    def test_cycles_are_stubbed(self) -> None:
        self.assertEqual(Workspace(id="ws-SihZTyXKfNXUWuUa"), self.workspace.current_run.workspace)

    def test_null_and_link_only_relationships(self) -> None:
        self.assertIsNone(self.workspace.current_state_version)
        self.assertIsNone(self.workspace.current_configuration_version)

    def test_unknown_attributes_are_ignored(self) -> None:
        document = {"data": {"id": "prj-1", "type": "projects", "attributes": {"name": "p", "brand-new": 1}}}
        self.assertEqual(Project(id="prj-1", name="p"), unmarshal_resource(document, Project))

    def test_page(self) -> None:
        page = unmarshal_page(load_test_data("workspaces.json"), Workspace)

        self.assertEqual(2, page.size)
        self.assertEqual(1, page.current_page)
        self.assertEqual(2, page.next_page)
        self.assertIsNone(page.previous_page)
        self.assertEqual(2, page.total_pages)
        self.assertEqual(3, page.total_count)
        self.assertFalse(page.is_last)
        self.assertEqual(["workspace-1", "workspace-2"], [workspace.name for workspace in page])
        self.assertEqual(ExecutionMode.AGENT, page[1].execution_mode)
        self.assertEqual(Organization(id="hashicorp"), page[0].organization)

    def test_page_without_pagination(self) -> None:
        document = {"data": [{"id": "varset-1", "type": "varsets", "attributes": {"name": "a", "global": True}}]}
        page = unmarshal_page(document, VariableSet)

        self.assertTrue(page.is_last)
        self.assertEqual(1, page.total_count)
        self.assertTrue(page[0].global_)

    def test_invalid_documents(self) -> None:
        with self.assertRaises(ClientValueError):
            unmarshal_resource({"data": []}, Workspace)
        with self.assertRaises(ClientValueError):
            unmarshal_page({"data": {}}, Workspace)
        with self.assertRaises(ClientValueError):
            unmarshal_resource("not a document", Workspace)
