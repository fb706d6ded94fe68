"""
Unit tests for Elastic Beanstalk naming conventions.
"""

import pytest

from paas_deployer.providers.aws import naming
from paas_deployer.providers.aws.naming import BeanstalkNaming


class TestArchiveName:

    def test_archive_name_format(self):
        assert naming.archive_name("abc123") == "heaven-abc123.zip"

    def test_archive_name_is_deterministic(self):
        assert naming.archive_name("abc123") == naming.archive_name("abc123")

    @pytest.mark.parametrize("sha_a,sha_b", [
        ("abc123", "abc124"),
        ("a" * 40, "b" * 40),
        ("abc", "abc1"),
    ])
    def test_distinct_shas_give_distinct_names(self, sha_a, sha_b):
        assert naming.archive_name(sha_a) != naming.archive_name(sha_b)


class TestVersionLabel:

    def test_version_label_prefix(self):
        label = naming.version_label("abc123", clock=lambda: 1700000000.7)
        assert label.startswith("heaven-abc123-1700000000-")

    def test_unique_within_the_same_second(self):
        """Two labels for the same sha built in the same second must differ."""
        frozen = lambda: 1700000000
        labels = {naming.version_label("abc123", clock=frozen) for _ in range(100)}
        assert len(labels) == 100

    def test_unique_across_naming_instances(self):
        frozen = lambda: 1700000000
        first = BeanstalkNaming("myapp", "prod", "abc123").version_label(frozen)
        second = BeanstalkNaming("myapp", "prod", "abc123").version_label(frozen)
        assert first != second

    def test_fits_beanstalk_label_limit_for_full_sha(self):
        assert len(naming.version_label("f" * 40)) <= 100


class TestBeanstalkNaming:

    def setup_method(self):
        self.naming = BeanstalkNaming("myapp", "prod", "abc123")

    def test_bucket_key(self):
        assert self.naming.bucket_key() == "myapp/heaven-abc123.zip"

    def test_environment_name(self):
        assert self.naming.environment_name() == "myapp-prod"

    def test_dashboard_url(self):
        url = self.naming.dashboard_url("eu-central-1", "e-xyz")
        assert url == (
            "https://console.aws.amazon.com/elasticbeanstalk/home?region=eu-central-1"
            "#/environment/dashboard?applicationName=myapp&environmentId=e-xyz"
        )
