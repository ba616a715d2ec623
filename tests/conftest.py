"""Shared fixtures for the formguard test-suite."""

from __future__ import annotations

import pytest

from formguard.config import get_settings
from formguard.models.fields import FieldDescriptor, Group
from formguard.models.forms import ContainerNode, FieldNode, FormDefinition
from formguard.validators import RecordingPresenter, ValidationEngine


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; make environment tweaks in one test invisible to the next."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_field():
    """Factory for descriptors that already sit inside group ``g-<id>``."""

    def _make(field_id: str = "f", **kwargs) -> FieldDescriptor:
        kwargs.setdefault("group", Group(id=f"g-{field_id}"))
        return FieldDescriptor(id=field_id, **kwargs)

    return _make


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def engine(presenter) -> ValidationEngine:
    return ValidationEngine(presenter)


@pytest.fixture
def signup_definition() -> FormDefinition:
    """A sign-up form: each control in its own list item, plus a terms checkbox."""
    return FormDefinition(
        id="signup",
        children=[
            ContainerNode(tag="ul", id="account", children=[
                ContainerNode(tag="li", id="row-email", children=[
                    FieldNode(id="email", type="email", required=True),
                ]),
                ContainerNode(tag="li", id="row-password", children=[
                    FieldNode(id="password", type="text", required=True, maxlength=12),
                ]),
                ContainerNode(tag="li", id="row-repeat", children=[
                    FieldNode(id="password_repeat", type="text", required=True, same_as="password"),
                ]),
            ]),
            ContainerNode(tag="ul", id="profile", children=[
                ContainerNode(tag="li", id="row-age", children=[
                    FieldNode(id="age", type="number", min="18", max="120"),
                ]),
                ContainerNode(tag="li", id="row-plan", children=[
                    FieldNode(id="plan-basic", type="radio", name="plan", required=True),
                    FieldNode(id="plan-pro", type="radio", name="plan", required=True),
                ]),
            ]),
            FieldNode(id="token", type="hidden"),
            FieldNode(id="save-account", type="submit", validates="account"),
            FieldNode(id="send", type="submit"),
        ],
    )
