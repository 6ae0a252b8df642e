"""Value objects describing one sync run."""

from pydantic import BaseModel, Field


class HeadState(BaseModel):
    """Where HEAD points: a local branch, or nothing when detached."""

    branch: str | None = None

    @property
    def detached(self) -> bool:
        return self.branch is None


class CommitSummary(BaseModel):
    """The fields of ``git log -1`` shown in the final report."""

    sha: str
    author: str
    date: str
    subject: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class SyncResult(BaseModel):
    """Outcome of a completed sync run."""

    remote: str
    default_branch: str
    synced_branch: str
    switched: bool = False
    untracked_files: list[str] = Field(default_factory=list)
    dependencies_refreshed: bool = False
    commit: CommitSummary | None = None
