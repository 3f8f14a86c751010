from unittest import TestCase

from common.components.singleton import Singleton


class StoreClient(Singleton):
    def __init__(self, bucket: str = "default"):
        self.bucket = bucket


class OtherClient(Singleton):
    def __init__(self, bucket: str = "default"):
        self.bucket = bucket


class PairClient(Singleton):
    def __init__(self, bucket: str, endpoint: str):
        self.bucket = bucket
        self.endpoint = endpoint


class TestSingleton(TestCase):
    def setUp(self):
        StoreClient.reset_instances()
        OtherClient.reset_instances()
        PairClient.reset_instances()

    def test_instance_identity(self):
        # normal case
        instance_1 = StoreClient("mail")
        instance_2 = StoreClient("mail")
        instance_3 = StoreClient("oss")
        self.assertIs(instance_1, instance_2)
        self.assertIsNot(instance_1, instance_3)

        # no arg case
        self.assertIs(StoreClient(), StoreClient())

        # None case
        self.assertIs(StoreClient(None), StoreClient(None))
        self.assertIsNot(StoreClient(None), instance_1)

        # keyword order does not matter
        instance_4 = PairClient(bucket="a", endpoint="b")
        instance_5 = PairClient(endpoint="b", bucket="a")
        self.assertIs(instance_4, instance_5)
        self.assertIsNot(PairClient("a", "b"), PairClient("b", "a"))

        # different class
        self.assertIsNot(instance_1, OtherClient("mail"))
        self.assertEqual(instance_1.bucket, "mail")

    def test_reset_instances(self):
        instance_1 = StoreClient("mail")
        other_1 = OtherClient("mail")

        StoreClient.reset_instances()

        instance_2 = StoreClient("mail")
        self.assertIsNot(instance_1, instance_2)
        # other classes keep their instances
        self.assertIs(other_1, OtherClient("mail"))

    def test_reset_instances_without_instance(self):
        StoreClient.reset_instances()
        StoreClient.reset_instances()
        self.assertEqual(StoreClient().bucket, "default")
