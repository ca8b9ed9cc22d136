"""
测试共享 fixtures
"""

import pytest

from cmdgate.command import Command, SubCommand, permission
from cmdgate.core import PermissibleUser, EventBus
from cmdgate.utils import config


@pytest.fixture(autouse=True)
def restore_config():
    """每个测试结束后还原全局配置"""
    snapshot = config.model_copy(deep=True)
    yield
    for key in type(config).model_fields:
        setattr(config, key, getattr(snapshot, key))


@pytest.fixture
def event_bus():
    bus = EventBus()
    yield bus
    bus.shutdown()


@pytest.fixture
def plain_user():
    """没有任何权限的用户"""
    return PermissibleUser("Steve")


@pytest.fixture
def admin_command():
    return Command("admin", aliases=["adm"])


class RecordingSubCommand(SubCommand):
    """记录调用参数的子命令（未标记权限）"""

    name = "reload"

    def __init__(self, command):
        super().__init__(command)
        self.calls = []

    def handle_subcommand(self, user, args):
        self.calls.append((user, list(args)))


class MarkedSubCommand(SubCommand):
    """处理器带裸 @permission 标记的子命令"""

    name = "ban"

    def __init__(self, command):
        super().__init__(command)
        self.calls = []

    @permission
    def handle_subcommand(self, user, args):
        self.calls.append((user, list(args)))


class DeclaredSubCommand(SubCommand):
    """标记自带权限节点与提示的子命令"""

    name = "kick"

    def __init__(self, command):
        super().__init__(command)
        self.calls = []

    @permission("admin.kick", "&cYou can't kick")
    def handle_subcommand(self, user, args):
        self.calls.append((user, list(args)))


@pytest.fixture
def recording_cls():
    return RecordingSubCommand


@pytest.fixture
def marked_cls():
    return MarkedSubCommand


@pytest.fixture
def declared_cls():
    return DeclaredSubCommand
