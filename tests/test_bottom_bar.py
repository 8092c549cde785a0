import pytest
from card.bottom_bar import BottomBarComponent, BottomBarManager, first_with_content


class StubWidget(BottomBarComponent):
    def __init__(self, component_id, content=False):
        super().__init__()
        self.component_id = component_id
        self.content = content

    def has_content(self):
        return self.content

    def render(self):
        return [f"{self.component_id} widget"]


@pytest.fixture
def widgets():
    return StubWidget("transportation"), StubWidget("action-bar")


@pytest.fixture
def manager(widgets):
    manager = BottomBarManager()
    for widget in widgets:
        manager.register_component(widget)
    return manager


def test_registration_does_not_select(manager, widgets):
    assert manager.components == widgets
    assert manager.current_component is None
    assert manager.render() == []


def test_duplicate_registration_is_ignored(manager, widgets):
    manager.register_component(widgets[0])
    assert manager.components == widgets


def test_render_delegates_to_current(manager, widgets):
    manager.select(widgets[1])
    assert manager.current_component is widgets[1]
    assert manager.render() == ["action-bar widget"]
    # Re-rendering keeps every registered widget
    manager.render()
    assert manager.components == widgets


def test_select_none_clears(manager, widgets):
    manager.select(widgets[0])
    manager.select(None)
    assert manager.current_component is None
    assert manager.render() == []


def test_select_unregistered_raises(manager):
    with pytest.raises(ValueError, match="not registered"):
        manager.select(StubWidget("stranger"))


def test_first_with_content_policy(manager, widgets):
    assert manager.update_selection() is None

    widgets[1].content = True
    assert manager.update_selection() is widgets[1]

    widgets[0].content = True
    assert manager.update_selection() is widgets[0]
    assert first_with_content([]) is None


def test_custom_policy(manager, widgets):
    manager.update_selection(lambda components: components[-1])
    assert manager.current_component is widgets[1]
