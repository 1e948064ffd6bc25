"""
Tests for job history and orphan job reconciliation.
"""

from datetime import timedelta
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.utils import timezone

import pytest

from apps.labels.exceptions import OrphanJobsDetected
from apps.labels.models import PrintJob, PrintJobLine
from apps.labels.services import JobHistory, OrphanReconciler, PrintJobManager


@pytest.fixture
def jobs_for(item_a):
    def _jobs_for(owner, count):
        return [PrintJobManager().create_job([item_a.id], {}, owner.pk).job_id for _ in range(count)]

    return _jobs_for


@pytest.mark.django_db
class TestOrphanReconciler:
    """Test OrphanReconciler.reconcile."""

    def test_deleting_user_leaves_jobs_behind(self, other_user, jobs_for):
        """Jobs are not cascaded when their owner is deleted."""
        jobs_for(other_user, 2)

        other_user.delete()

        assert PrintJob.objects.count() == 2

    def test_removes_exactly_the_orphans(self, user, other_user, jobs_for):
        """N jobs with M orphans leaves N - M."""
        jobs_for(user, 3)
        orphan_ids = jobs_for(other_user, 2)
        other_user.delete()

        deleted = OrphanReconciler().reconcile()

        assert deleted == 2
        assert PrintJob.objects.count() == 3
        assert not PrintJob.objects.filter(id__in=orphan_ids).exists()
        assert not PrintJobLine.objects.filter(job_id__in=orphan_ids).exists()

    def test_idempotent(self, user, jobs_for):
        jobs_for(user, 2)

        assert OrphanReconciler().reconcile() == 0
        assert OrphanReconciler().reconcile() == 0
        assert PrintJob.objects.count() == 2

    def test_no_jobs(self):
        assert OrphanReconciler().reconcile() == 0

    def test_management_command(self, other_user, jobs_for):
        jobs_for(other_user, 1)
        other_user.delete()
        out = StringIO()

        call_command("reconcile_label_jobs", stdout=out)

        assert "Deleted 1 orphan print job(s)" in out.getvalue()
        assert not PrintJob.objects.exists()


@pytest.mark.django_db
class TestJobHistory:
    """Test JobHistory.list_jobs."""

    def test_newest_first_with_owner(self, user, jobs_for):
        older, newer = jobs_for(user, 2)
        PrintJob.objects.filter(pk=older).update(created_at=timezone.now() - timedelta(hours=1))

        jobs = JobHistory().list_jobs()

        assert [job.id for job in jobs] == [newer, older]
        assert jobs[0].owner_name == "Asha Rao"
        assert jobs[0].owner_email == "labeler@example.com"
        assert jobs[0].total_items == 1
        assert jobs[0].lines[0]["encoded_string"] == "12508"

    def test_limit(self, user, jobs_for):
        jobs_for(user, 3)

        assert len(JobHistory().list_jobs(limit=2)) == 2

    def test_listing_heals_orphans(self, user, other_user, jobs_for):
        """A listing that meets orphaned jobs reconciles them and succeeds."""
        kept = jobs_for(user, 3)
        jobs_for(other_user, 2)
        other_user.delete()

        jobs = JobHistory().list_jobs()

        assert sorted(job.id for job in jobs) == sorted(kept)
        assert PrintJob.objects.count() == 3

    def test_retries_only_once(self, other_user, jobs_for):
        """If reconciliation does not help, the error is raised after one retry."""
        jobs_for(other_user, 1)
        other_user.delete()
        reconciler = mock.Mock()
        reconciler.reconcile.return_value = 0

        with pytest.raises(OrphanJobsDetected):
            JobHistory(reconciler=reconciler).list_jobs()

        reconciler.reconcile.assert_called_once_with()

    def test_reconciler_not_called_when_clean(self, user, jobs_for):
        jobs_for(user, 1)
        reconciler = mock.Mock()

        JobHistory(reconciler=reconciler).list_jobs()

        reconciler.reconcile.assert_not_called()
