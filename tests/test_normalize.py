"""Unit tests for store.normalize — outbound payloads and inbound form records."""
from datetime import datetime

import pytest

from schemas import Contact, Opportunity, Project, Task
from store.normalize import format_display_date, inbound, outbound


class TestContactOutbound:
    def test_camel_case_draft(self):
        contact = Contact.model_validate({
            "firstName": "John",
            "lastName": "Doe",
            "email": "john@x.com",
            "tags": ["VIP", "Hot"],
        })

        payload = outbound(contact)

        assert payload["Name"] == "John Doe"
        assert payload["first_name"] == "John"
        assert payload["last_name"] == "Doe"
        assert payload["email"] == "john@x.com"
        assert payload["Tags"] == "VIP,Hot"
        assert payload["stage"] == "lead"
        assert "Id" not in payload

    def test_snake_case_draft(self):
        contact = Contact.model_validate({"first_name": "Ada", "last_name": "Lovelace"})
        assert outbound(contact)["Name"] == "Ada Lovelace"

    def test_name_trimmed_when_last_name_missing(self):
        assert outbound(Contact(first_name="Cher"))["Name"] == "Cher"

    def test_no_tags_omits_column(self):
        assert "Tags" not in outbound(Contact(first_name="Ada"))

    def test_update_carries_id(self):
        payload = outbound(Contact.model_validate({"Id": 12, "firstName": "Ada"}), include_id=True)
        assert payload["Id"] == 12


class TestOpportunityOutbound:
    def test_numbers_coerced(self):
        opp = Opportunity.model_validate({
            "title": "Enterprise license",
            "value": "25000",
            "probability": "45.7",
            "assignedTo": "Sam",
            "contactId": 3,
        })

        payload = outbound(opp)

        assert payload["value"] == 25000.0
        assert payload["probability"] == 45
        assert payload["assigned_to"] == "Sam"
        assert payload["contact"] == 3
        assert payload["Name"] == "Enterprise license"

    def test_invalid_numbers_default_to_zero(self):
        payload = outbound(Opportunity.model_validate({"title": "X", "value": "n/a", "probability": None}))
        assert payload["value"] == 0.0
        assert payload["probability"] == 0

    def test_missing_contact_omitted(self):
        assert "contact" not in outbound(Opportunity(title="X"))


class TestProjectOutbound:
    def test_defaults_and_date(self):
        project = Project.model_validate({
            "name": "Website relaunch",
            "dueDate": datetime(2024, 5, 1, 15, 30),
            "owner": 4,
        })

        payload = outbound(project)

        assert payload["Name"] == "Website relaunch"
        assert payload["priority"] == "medium"
        assert payload["status"] == "active"
        assert payload["due_date"] == "2024-05-01"
        assert payload["Owner"] == 4
        assert "Tags" not in payload

    def test_no_due_date_omitted(self):
        assert "due_date" not in outbound(Project(name="P"))


class TestTaskOutbound:
    def test_title_falls_back_to_name(self):
        task = Task.model_validate({"name": "Call the bank"})
        payload = outbound(task)
        assert payload["title"] == "Call the bank"
        assert payload["Name"] == "Call the bank"

    def test_defaults(self):
        payload = outbound(Task(title="T"))
        assert payload["priority"] == "medium"
        assert payload["status"] == "todo"
        assert payload["category"] == "work"

    def test_references_accept_camel_case(self):
        payload = outbound(Task.model_validate({"title": "T", "projectId": 9, "assigneeId": "u-1"}))
        assert payload["project_id"] == 9
        assert payload["assignee_id"] == "u-1"

    def test_empty_text_omitted_on_create_but_sent_when_supplied(self):
        draft = {"Id": 5, "title": "T", "subtasks": "", "comments": ""}
        task = Task.model_validate(draft)
        assert "subtasks" not in outbound(task)
        assert "comments" not in outbound(task)

        payload = outbound(task, include_id=True, fields=Task.supplied_fields(draft))
        assert payload["subtasks"] == ""
        assert payload["comments"] == ""

    def test_date_string_truncated(self):
        payload = outbound(Task.model_validate({"title": "T", "due_date": "2024-05-01T00:00:00Z"}))
        assert payload["due_date"] == "2024-05-01"


class TestLimitedOutbound:
    def test_supplied_fields_follow_aliases(self):
        draft = {"Id": 1, "firstName": "Ada", "Tags": "", "stage": "qualified"}
        assert Contact.supplied_fields(draft) == {"id", "first_name", "tags", "stage"}

    def test_name_needs_every_part(self):
        contact = Contact.model_validate({"Id": 1, "firstName": "Ada"})

        payload = outbound(contact, include_id=True, fields={"id", "first_name"})

        assert payload == {"Id": 1, "first_name": "Ada"}

    def test_name_derived_when_parts_supplied(self):
        contact = Contact.model_validate({"Id": 1, "firstName": "Ada", "lastName": "King"})

        payload = outbound(contact, include_id=True, fields={"id", "first_name", "last_name"})

        assert payload["Name"] == "Ada King"

    def test_supplied_empty_tags_clear_the_column(self):
        project = Project.model_validate({"Id": 3, "tags": []})

        payload = outbound(project, include_id=True, fields={"id", "tags"})

        assert payload == {"Id": 3, "Tags": ""}


class TestInbound:
    def test_store_record_to_form(self):
        task = inbound(Task, {
            "Id": 5,
            "Name": "From name",
            "Tags": "a, b,,c",
            "due_date": "2024-05-01T10:00:00",
            "project_id": {"Id": 9, "Name": "Website"},
            "CreatedOn": "2024-04-01T09:00:00Z",
        })

        assert task.id == 5
        assert task.title == "From name"
        assert task.tags == ["a", "b", "c"]
        assert task.due_date == "2024-05-01"
        assert task.project_id == 9
        assert task.created_on == "2024-04-01T09:00:00Z"

    def test_missing_fields_get_defaults(self):
        task = inbound(Task, {"Id": 1})
        assert task.description == ""
        assert task.priority == "medium"
        assert task.status == "todo"
        assert task.category == "work"
        assert task.tags == []
        assert task.due_date is None

    def test_nulls_and_blanks_get_defaults(self):
        contact = inbound(Contact, {"first_name": None, "phone": None, "stage": ""})
        assert contact.first_name == ""
        assert contact.phone == ""
        assert contact.stage == "lead"

    def test_numeric_store_values_become_text(self):
        assert inbound(Contact, {"phone": 5551234}).phone == "5551234"

    def test_empty_record(self):
        assert inbound(Project, None).name == ""


@pytest.mark.parametrize("draft", [
    Contact(
        first_name="Ada", last_name="Lovelace", email="ada@example.com", phone="555",
        company="Analytical", position="CTO", stage="proposal", tags=["VIP", "Hot"], owner=2,
    ),
    Opportunity(
        title="Renewal", value=1500.0, stage="negotiation", probability=80,
        assigned_to="Sam", contact=3, tags=["Q3"],
    ),
    Project(
        name="Website", description="Relaunch", priority="high", status="on-hold",
        due_date="2024-05-01", tags=["web"], owner=4,
    ),
    Task(
        title="Draft copy", description="Homepage", priority="low", status="review",
        category="personal", due_date="2024-06-30", project_id=9, assignee_id=11,
        subtasks="outline\nfirst pass", comments="looks good", tags=["copy", "web"],
    ),
], ids=["contact", "opportunity", "project", "task"])
def test_inbound_restores_outbound_fields(draft):
    assert inbound(type(draft), outbound(draft)) == draft


class TestFormatDisplayDate:
    def test_date_string(self):
        assert format_display_date("2024-05-01") == "May 01, 2024"

    def test_datetime_string(self):
        assert format_display_date("2024-05-01T10:00:00Z") == "May 01, 2024"

    def test_empty_and_invalid(self):
        assert format_display_date("") == ""
        assert format_display_date(None) == ""
        assert format_display_date("not a date") == ""
