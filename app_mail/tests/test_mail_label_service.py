"""
单元测试：MailLabelService 标签

测试覆盖：
- Spam 系统标签按需创建且只创建一次
- 标签创建、重命名、删除
- 系统标签不能修改或删除
- 删除标签时从所有邮件上移除
"""
from unittest.mock import patch

from django.db import IntegrityError
from django.test import TestCase

from app_mail.exceptions.mail_not_found_exception import MailNotFoundException
from app_mail.exceptions.mail_policy_exception import MailPolicyException
from app_mail.exceptions.mail_validation_exception import MailValidationException
from app_mail.models.mail_label import MailLabel
from app_mail.models.mail_message import MailMessage
from app_mail.models.message_label import MessageLabel
from app_mail.repos import attach_label, get_labels_by_message
from app_mail.services.mail_label_service import MailLabelService

DB = 'mail_rw'


class TestMailLabelService(TestCase):
    """测试 MailLabelService"""

    databases = {'default', 'mail_rw'}

    def setUp(self):
        self.service = MailLabelService()
        self.owner_id = 1
        self.other_id = 2

    def _message(self, owner_id):
        return MailMessage.objects.using(DB).create(
            owner_id=owner_id, folder='inbox', from_address='s@example.com', subject='S', body='B'
        )

    def test_ensure_system_spam_label(self):
        """测试重复调用只保存一个 Spam 标签"""
        label_1 = self.service.ensure_system_spam_label(self.owner_id)
        label_2 = self.service.ensure_system_spam_label(self.owner_id)

        self.assertEqual(label_1.id, label_2.id)
        self.assertEqual('Spam', label_1.name)
        self.assertTrue(label_1.is_system_label)
        self.assertEqual(1, MailLabel.objects.using(DB).filter(owner_id=self.owner_id).count())

        # per owner
        other = self.service.ensure_system_spam_label(self.other_id)
        self.assertNotEqual(label_1.id, other.id)

    def test_ensure_system_spam_label_lost_race(self):
        """测试并发创建冲突时读取已存在的标签"""
        existing = self.service.ensure_system_spam_label(self.owner_id)

        with patch('django.db.models.query.QuerySet.get_or_create', side_effect=IntegrityError('duplicate')):
            label = self.service.ensure_system_spam_label(self.owner_id)

        self.assertEqual(existing.id, label.id)
        self.assertEqual(1, MailLabel.objects.using(DB).filter(owner_id=self.owner_id).count())

    def test_create_and_list_labels(self):
        """测试创建和列出标签"""
        work = self.service.create_label(self.owner_id, ' Work ')
        self.service.create_label(self.owner_id, 'Family')
        self.service.create_label(self.other_id, 'Work')

        self.assertEqual('Work', work['name'])
        self.assertFalse(work['is_system_label'])

        labels = self.service.list_labels(self.owner_id)
        self.assertEqual(['Work', 'Family'], [label['name'] for label in labels])

    def test_create_label_validation(self):
        """测试标签名校验"""
        for name in (None, '', '   ', 3):
            with self.assertRaises(MailValidationException) as context:
                self.service.create_label(self.owner_id, name)
            self.assertEqual('Label name is required', str(context.exception))

        self.service.create_label(self.owner_id, 'Work')
        with self.assertRaises(MailValidationException) as context:
            self.service.create_label(self.owner_id, 'Work')
        self.assertEqual('Label name already exists', str(context.exception))

        # the system label name is reserved
        self.service.ensure_system_spam_label(self.owner_id)
        with self.assertRaises(MailPolicyException):
            self.service.create_label(self.owner_id, 'Spam')

    def test_system_label_name_is_reserved(self):
        """测试用户标签不能占用 Spam 名称，之后创建的系统标签名称唯一"""
        with self.assertRaises(MailPolicyException) as context:
            self.service.create_label(self.owner_id, ' Spam ')
        self.assertEqual('Label name is reserved', str(context.exception))

        work = self.service.create_label(self.owner_id, 'Work')
        with self.assertRaises(MailPolicyException):
            self.service.rename_label(self.owner_id, work['id'], 'Spam')
        self.assertEqual('Work', MailLabel.objects.using(DB).get(id=work['id']).name)

        spam = self.service.ensure_system_spam_label(self.owner_id)
        labels = MailLabel.objects.using(DB).filter(owner_id=self.owner_id, name='Spam')
        self.assertEqual([spam.id], [label.id for label in labels])
        self.assertTrue(spam.is_system_label)

    def test_rename_label(self):
        """测试重命名标签"""
        label = self.service.create_label(self.owner_id, 'Work')
        self.service.create_label(self.owner_id, 'Family')

        renamed = self.service.rename_label(self.owner_id, label['id'], 'Office')
        self.assertEqual('Office', renamed['name'])
        self.assertEqual('Office', MailLabel.objects.using(DB).get(id=label['id']).name)

        # same name again is allowed
        self.service.rename_label(self.owner_id, label['id'], 'Office')

        with self.assertRaises(MailValidationException):
            self.service.rename_label(self.owner_id, label['id'], 'Family')

    def test_rename_label_not_owned(self):
        """测试重命名他人的标签"""
        label = self.service.create_label(self.other_id, 'Work')

        with self.assertRaises(MailNotFoundException) as context:
            self.service.rename_label(self.owner_id, label['id'], 'Mine')
        self.assertEqual('Label not found or unauthorized', str(context.exception))

    def test_system_label_is_protected(self):
        """测试系统标签不能修改或删除"""
        spam = self.service.ensure_system_spam_label(self.owner_id)
        message = self._message(self.owner_id)
        attach_label(message.id, spam.id)

        with self.assertRaises(MailPolicyException) as context:
            self.service.rename_label(self.owner_id, spam.id, 'Junk')
        self.assertEqual('Cannot modify system label', str(context.exception))

        with self.assertRaises(MailPolicyException) as context:
            self.service.delete_label(self.owner_id, spam.id)
        self.assertEqual('Cannot delete system label', str(context.exception))

        # state unchanged
        spam.refresh_from_db(using=DB)
        self.assertEqual('Spam', spam.name)
        self.assertEqual([spam.id], [label.id for label in get_labels_by_message(message.id)])

    def test_delete_label_detaches_everywhere(self):
        """测试删除标签时从所有邮件上移除，邮件保留"""
        label = self.service.create_label(self.owner_id, 'Work')
        keep = self.service.create_label(self.owner_id, 'Keep')
        messages = [self._message(self.owner_id) for _ in range(3)]
        for message in messages:
            attach_label(message.id, label['id'])
        attach_label(messages[0].id, keep['id'])

        self.assertTrue(self.service.delete_label(self.owner_id, label['id']))

        self.assertFalse(MailLabel.objects.using(DB).filter(id=label['id']).exists())
        self.assertFalse(MessageLabel.objects.using(DB).filter(label_id=label['id']).exists())
        self.assertEqual(3, MailMessage.objects.using(DB).filter(owner_id=self.owner_id).count())
        self.assertEqual(['Keep'], [l.name for l in get_labels_by_message(messages[0].id)])

    def test_delete_label_not_owned(self):
        """测试删除他人的标签"""
        label = self.service.create_label(self.other_id, 'Work')

        with self.assertRaises(MailNotFoundException):
            self.service.delete_label(self.owner_id, label['id'])
        with self.assertRaises(MailNotFoundException):
            self.service.delete_label(self.owner_id, 999999)
        self.assertTrue(MailLabel.objects.using(DB).filter(id=label['id']).exists())
