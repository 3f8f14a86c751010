"""
单元测试：实时通知（Django Channels）

测试覆盖：
- 地址到分组名的映射
- 发布 newEmail 事件到订阅者
- 关闭通知、通道层异常时不抛出
"""
from unittest import TestCase
from unittest.mock import patch, MagicMock, AsyncMock

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from app_mail.services import notification_service
from app_mail.services.notification_service import group_for_address, publish, notify_new_email


class TestNotificationService(TestCase):
    """测试 notification_service"""

    def setUp(self):
        self.layer = get_channel_layer()
        self.channel_name = async_to_sync(self.layer.new_channel)()

    def _subscribe(self, email):
        async_to_sync(self.layer.group_add)(group_for_address(email), self.channel_name)

    def _receive(self):
        return async_to_sync(self.layer.receive)(self.channel_name)

    def test_group_for_address(self):
        """测试分组名稳定、不区分大小写、只含合法字符"""
        group = group_for_address('Alice@Example.com')

        self.assertEqual(group, group_for_address(' alice@example.com '))
        self.assertNotEqual(group, group_for_address('bob@example.com'))
        self.assertTrue(group.startswith('mail_'))
        self.assertNotIn('@', group)
        self.assertLess(len(group), 100)

    def test_notify_new_email(self):
        """测试订阅者收到 newEmail 事件"""
        self._subscribe('a@example.com')

        delivered = notify_new_email('a@example.com', 's@example.com', 'Hello', 1700000000000, False)

        self.assertTrue(delivered)
        message = self._receive()
        self.assertEqual('mail.event', message['type'])
        self.assertEqual('newEmail', message['event'])
        self.assertEqual({
            'sender': 's@example.com',
            'subject': 'Hello',
            'sentAt': 1700000000000,
            'isSpam': False,
        }, message['data'])

    def test_publish_custom_event(self):
        self._subscribe('b@example.com')

        self.assertTrue(publish('b@example.com', 'labelChanged', {'id': 1}))

        message = self._receive()
        self.assertEqual('labelChanged', message['event'])
        self.assertEqual({'id': 1}, message['data'])

    @patch('app_mail.services.notification_service.get_app_config')
    def test_disabled(self, mock_get_config):
        """测试关闭通知"""
        mock_get_config.return_value = {'notify_enabled': False}

        self.assertFalse(notify_new_email('a@example.com', 's@example.com', 'Hello', 1, False))

    @patch('app_mail.services.notification_service.get_channel_layer')
    def test_layer_failure_is_swallowed(self, mock_get_layer):
        """测试通道层异常时只记录日志"""
        layer = MagicMock()
        layer.group_send = AsyncMock(side_effect=RuntimeError('redis down'))
        mock_get_layer.return_value = layer

        with self.assertLogs(notification_service.logger, level='WARNING'):
            self.assertFalse(publish('a@example.com', 'newEmail', {}))

    @patch('app_mail.services.notification_service.get_channel_layer')
    def test_no_layer(self, mock_get_layer):
        """测试未配置通道层"""
        mock_get_layer.return_value = None

        self.assertFalse(publish('a@example.com', 'newEmail', {}))
