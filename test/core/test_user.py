"""
执行者实现测试
"""

import io

import pytest

from cmdgate.core import User, PermissibleUser, ConsoleUser, permission_matches


class TestPermissionMatches:
    """测试权限节点匹配"""

    @pytest.mark.parametrize(
        "granted, permission, expected",
        [
            ("admin.ban", "admin.ban", True),
            ("admin.ban", "admin.kick", False),
            ("*", "anything.at.all", True),
            ("admin.*", "admin.ban", True),
            ("admin.*", "admin.ban.temp", True),
            ("admin.*", "administrator.ban", False),
            ("admin", "admin.ban", False),
        ],
    )
    def test_matches(self, granted, permission, expected):
        assert permission_matches(granted, permission) is expected


class TestPermissibleUser:
    """测试基于集合的执行者"""

    def test_grant_and_revoke(self):
        """测试授予与撤销即时生效"""
        user = PermissibleUser("Steve")
        assert not user.has_permission("admin.ban")

        user.grant("admin.ban", "admin.kick")
        assert user.has_permission("admin.ban")
        assert user.permissions == {"admin.ban", "admin.kick"}

        user.revoke("admin.ban")
        assert not user.has_permission("admin.ban")
        assert user.has_permission("admin.kick")

    def test_messages_recorded_and_forwarded(self):
        """测试消息记录与回调转发"""
        forwarded = []
        user = PermissibleUser("Steve", on_message=forwarded.append)

        user.send_message("§cHello")

        assert user.messages == ["§cHello"]
        assert user.plain_messages == ["Hello"]
        assert forwarded == ["§cHello"]

    def test_permissions_property_is_copy(self):
        """测试权限集合返回副本"""
        user = PermissibleUser("Steve", ["a.b"])

        user.permissions.add("c.d")

        assert not user.has_permission("c.d")

    def test_repr(self):
        assert repr(PermissibleUser("Steve")) == "PermissibleUser('Steve')"


class TestConsoleUser:
    """测试控制台执行者"""

    def test_has_all_permissions(self):
        assert ConsoleUser().has_permission("any.node")

    def test_plain_output(self):
        """测试关闭 ANSI 时去除颜色码"""
        stream = io.StringIO()
        user = ConsoleUser(stream=stream, ansi=False)

        user.send_message("§cNo permission")

        assert stream.getvalue() == "No permission\n"

    def test_ansi_output(self):
        """测试渲染 ANSI 颜色"""
        stream = io.StringIO()
        user = ConsoleUser(stream=stream)

        user.send_message("§cNo")

        assert stream.getvalue() == "\033[0;91mNo\033[0m\n"


class TestUserContract:
    """测试抽象接口"""

    def test_abstract(self):
        with pytest.raises(TypeError):
            User()
