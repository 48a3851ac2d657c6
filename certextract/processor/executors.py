from collections.abc import Callable
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, ClassVar


class InlineExecutor(Executor):
    """Runs every submitted call immediately on the calling thread."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        future: Future[Any] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class ExecutorFactory:
    """Creates the executor a batch fans out on, from settings.batch_executor."""

    KINDS: ClassVar[tuple[str, ...]] = ("thread", "process", "inline")

    @classmethod
    def create(cls, kind: str, max_workers: int) -> Executor:
        kind = kind.lower()
        if kind == "thread":
            return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="certextract")
        if kind == "process":
            return ProcessPoolExecutor(max_workers=max_workers)
        if kind == "inline":
            return InlineExecutor()
        raise ValueError(f"Unknown batch executor '{kind}'. Choose from: {list(cls.KINDS)}")
