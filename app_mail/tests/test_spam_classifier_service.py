"""
单元测试：垃圾邮件分类

测试覆盖：
- 关键词、链接数量、发件人验证、收件人数量、附件规则
- 规则顺序与确定性
- 内部异常时判定为非垃圾邮件
"""
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from app_mail.models.mail_user import MailUser
from app_mail.pojo.mail_draft import MailDraft, AttachmentRef
from app_mail.services.spam_classifier_service import (
    classify,
    count_links,
    has_spam_keyword,
)

SENDER = 'sender@example.com'


def _attachment(filename: str, size: int = 1024) -> AttachmentRef:
    return AttachmentRef(filename=filename, size=size, oss_bucket='mail-attachments', oss_key=f'1/k/{filename}')


class TestSpamClassifier(TestCase):
    """测试 classify"""

    databases = {'default', 'mail_rw'}

    def setUp(self):
        MailUser.objects.using('mail_rw').create(
            phone='10000000001', email=SENDER, name='Sender', is_email_verified=True
        )

    def _draft(self, **kwargs) -> MailDraft:
        fields = {
            'sender': SENDER,
            'recipients': ('a@example.com',),
            'subject': 'Meeting notes',
            'body': '<p>See you tomorrow</p>',
        }
        fields.update(kwargs)
        return MailDraft(**fields)

    def test_clean_message(self):
        """测试正常邮件不是垃圾邮件"""
        self.assertFalse(classify(self._draft(), SENDER))

    def test_keyword_in_subject(self):
        """测试主题包含关键词（不区分大小写）"""
        self.assertTrue(classify(self._draft(subject='LIMITED TIME OFFER inside'), SENDER))

    def test_keyword_in_body(self):
        """测试正文包含关键词"""
        self.assertTrue(classify(self._draft(body='<b>Click here</b> now'), SENDER))

    def test_links(self):
        """测试链接数量超过 5 个"""
        five = ' '.join(f'http://example.com/{i}' for i in range(5))
        self.assertFalse(classify(self._draft(body=five), SENDER))

        six = five + ' https://example.com/5'
        self.assertTrue(classify(self._draft(body=six), SENDER))

    def test_repeated_links_are_counted(self):
        """测试重复链接每次出现都计数"""
        body = ' '.join(['http://example.com'] * 6)
        self.assertEqual(6, count_links(body))
        self.assertTrue(classify(self._draft(body=body), SENDER))

    def test_unverified_sender(self):
        """测试发件人未验证"""
        MailUser.objects.using('mail_rw').create(
            phone='10000000002', email='nobody@example.com', is_email_verified=False
        )
        self.assertTrue(classify(self._draft(sender='nobody@example.com'), 'nobody@example.com'))
        self.assertTrue(classify(self._draft(sender='ghost@example.com'), 'ghost@example.com'))

    def test_recipient_count(self):
        """测试收件人数量超过 10 个（只计 To）"""
        ten = tuple(f'r{i}@example.com' for i in range(10))
        self.assertFalse(classify(self._draft(recipients=ten), SENDER))

        eleven = ten + ('r10@example.com',)
        self.assertTrue(classify(self._draft(recipients=eleven), SENDER))

        # cc is not counted
        cc = tuple(f'c{i}@example.com' for i in range(20))
        self.assertFalse(classify(self._draft(cc=cc), SENDER))

    def test_attachment_size(self):
        """测试附件超过 5 MiB"""
        self.assertFalse(classify(self._draft(attachments=(_attachment('a.pdf', 5 * 1024 * 1024),)), SENDER))
        self.assertTrue(classify(self._draft(attachments=(_attachment('a.pdf', 5 * 1024 * 1024 + 1),)), SENDER))

    def test_attachment_extension(self):
        """测试附件扩展名"""
        for filename in ('photo.JPG', 'photo.jpeg', 'scan.png', 'report.pdf'):
            self.assertFalse(classify(self._draft(attachments=(_attachment(filename),)), SENDER), filename)

        for filename in ('setup.exe', 'archive.pdf.zip', 'README'):
            self.assertTrue(classify(self._draft(attachments=(_attachment(filename),)), SENDER), filename)

    def test_deterministic(self):
        """测试相同输入结果相同"""
        draft = self._draft(subject='Lottery results')
        self.assertEqual(classify(draft, SENDER), classify(draft, SENDER))

        clean = self._draft()
        self.assertEqual([False, False, False], [classify(clean, SENDER) for _ in range(3)])

    def test_keyword_short_circuits_lookup(self):
        """测试关键词命中后不再查询发件人"""
        with patch('app_mail.services.spam_classifier_service.get_verified_user_by_email') as mock_lookup:
            self.assertTrue(classify(self._draft(subject='urgent'), SENDER))
            mock_lookup.assert_not_called()

    def test_fail_open(self):
        """测试用户目录查询失败时不把发件人当作未验证"""
        with patch.object(MailUser.objects, 'using', side_effect=DatabaseError('directory down')):
            self.assertFalse(classify(self._draft(), SENDER))

    def test_has_spam_keyword(self):
        self.assertTrue(has_spam_keyword('Make Money Fast', ''))
        self.assertTrue(has_spam_keyword('', 'cheap pills'))
        self.assertFalse(has_spam_keyword('Quarterly report', 'numbers attached'))
        self.assertFalse(has_spam_keyword(None, None))
