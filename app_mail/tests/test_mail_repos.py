"""
单元测试：邮件仓储层

测试覆盖：
- 用户目录查询（验证与未验证邮箱）
- 按文件夹分页、星标与标签过滤
- 搜索条件组合
- 标签关联的增删与批量查询
"""
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from app_mail.models.mail_user import MailUser
from app_mail.repos import (
    create_user,
    get_user_by_email,
    get_verified_user_by_email,
    get_verified_users_by_emails,
    create_mail_message,
    get_owned_message,
    list_messages_by_folder,
    search_messages,
    update_owned_message,
    create_mail_attachment,
    create_label,
    get_or_create_system_label,
    attach_label,
    detach_label,
    detach_label_from_all,
    get_labels_by_messages,
)


class TestMailUserRepo(TestCase):
    """测试用户目录查询"""
    databases = {'default', 'mail_rw'}

    def setUp(self):
        self.verified = create_user('3001', email='v@example.com', is_email_verified=True)
        self.unverified = create_user('3002', email='n@example.com')

    def test_get_user_by_email(self):
        self.assertEqual(self.unverified.id, get_user_by_email('n@example.com').id)
        self.assertIsNone(get_user_by_email('x@example.com'))
        self.assertIsNone(get_user_by_email(''))

    def test_get_verified_user_by_email(self):
        self.assertEqual(self.verified.id, get_verified_user_by_email('v@example.com').id)
        self.assertIsNone(get_verified_user_by_email('n@example.com'))

    def test_get_verified_users_by_emails(self):
        users = get_verified_users_by_emails(['v@example.com', 'n@example.com', 'v@example.com'])

        self.assertEqual([self.verified.id], [user.id for user in users])
        self.assertEqual([], get_verified_users_by_emails([]))

    def test_directory_fault_propagates(self):
        with patch.object(MailUser.objects, 'using', side_effect=DatabaseError('directory down')):
            with self.assertRaises(DatabaseError):
                get_verified_users_by_emails(['v@example.com'])
            with self.assertRaises(DatabaseError):
                get_verified_user_by_email('v@example.com')


class TestMailMessageRepo(TestCase):
    """测试邮件查询"""
    databases = {'default', 'mail_rw'}

    def _create(self, owner_id=1, folder='inbox', sent_at=1000, **kwargs):
        return create_mail_message(owner_id=owner_id, folder=folder, from_address='a@example.com',
                                   sent_at=sent_at, **kwargs)

    def test_owned_message_is_scoped(self):
        message = self._create()

        self.assertEqual(message.id, get_owned_message(1, message.id).id)
        self.assertIsNone(get_owned_message(2, message.id))

    def test_list_newest_first(self):
        old = self._create(sent_at=1000)
        new = self._create(sent_at=3000)
        self._create(folder='sent', sent_at=2000)

        result = list_messages_by_folder(1, 'inbox', offset=0, limit=10)

        self.assertEqual(2, result['total'])
        self.assertEqual([new.id, old.id], [m.id for m in result['messages']])

    def test_list_pagination(self):
        for i in range(5):
            self._create(sent_at=1000 + i)

        result = list_messages_by_folder(1, 'inbox', offset=3, limit=10)

        self.assertEqual(5, result['total'])
        self.assertEqual(2, len(result['messages']))

    def test_list_starred_across_folders(self):
        inbox = self._create()
        sent = self._create(folder='sent')
        self._create()
        update_owned_message(1, inbox.id, is_starred=True)
        update_owned_message(1, sent.id, is_starred=True)

        result = list_messages_by_folder(1, 'starred')

        self.assertEqual({inbox.id, sent.id}, {m.id for m in result['messages']})

    def test_list_by_label(self):
        labeled = self._create()
        self._create()
        label = create_label(1, 'Work')
        attach_label(labeled.id, label.id)

        result = list_messages_by_folder(1, 'inbox', label_id=label.id)

        self.assertEqual([labeled.id], [m.id for m in result['messages']])

    def test_update_other_owner(self):
        message = self._create()

        self.assertEqual(0, update_owned_message(2, message.id, is_read=True))
        self.assertEqual(1, update_owned_message(1, message.id, is_read=True))

    def test_search(self):
        budget = self._create(subject='Q3 Budget', to_addresses='b@example.com', sent_at=5000)
        self._create(subject='Lunch', body='budget talk', folder='trash')
        lunch = self._create(subject='Lunch', cc_addresses='c@example.com', sent_at=1000)
        create_mail_attachment(budget.id, 'plan.pdf', 10, 'bucket', 'key', 'application/pdf')

        self.assertEqual([budget.id], [m.id for m in search_messages(1, keyword='BUDGET')])
        self.assertEqual([lunch.id], [m.id for m in search_messages(1, to_address='c@example')])
        self.assertEqual([budget.id], [m.id for m in search_messages(1, has_attachment=True)])
        self.assertEqual([lunch.id], [m.id for m in search_messages(1, end_ms=2000)])
        self.assertEqual([], search_messages(2))


class TestMessageLabelRepo(TestCase):
    """测试标签关联"""
    databases = {'default', 'mail_rw'}

    def setUp(self):
        self.message = create_mail_message(owner_id=1, folder='inbox', from_address='a@example.com')
        self.label = create_label(1, 'Work')

    def test_attach_twice(self):
        self.assertTrue(attach_label(self.message.id, self.label.id))
        self.assertFalse(attach_label(self.message.id, self.label.id))

        labels = get_labels_by_messages([self.message.id])
        self.assertEqual(['Work'], [label.name for label in labels[self.message.id]])

    def test_detach(self):
        attach_label(self.message.id, self.label.id)

        self.assertEqual(1, detach_label(self.message.id, self.label.id))
        self.assertEqual(0, detach_label(self.message.id, self.label.id))
        self.assertEqual({}, get_labels_by_messages([self.message.id]))

    def test_detach_from_all(self):
        other = create_mail_message(owner_id=1, folder='inbox', from_address='a@example.com')
        attach_label(self.message.id, self.label.id)
        attach_label(other.id, self.label.id)

        self.assertEqual(2, detach_label_from_all(self.label.id))

    def test_system_label_get_or_create(self):
        spam, created = get_or_create_system_label(1, 'Spam')
        again, created_again = get_or_create_system_label(1, 'Spam')

        self.assertTrue(created)
        self.assertFalse(created_again)
        self.assertEqual(spam.id, again.id)
        self.assertTrue(spam.is_system_label)
