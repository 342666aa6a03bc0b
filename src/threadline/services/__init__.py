from threadline.services.check import CheckRequest, check_repository, run_check

__all__ = [
    "CheckRequest",
    "check_repository",
    "run_check",
]
