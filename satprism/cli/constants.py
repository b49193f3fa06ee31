"""Exit codes used by the CLI."""

from satprism.core.models import FailureKind

SUCCESS_EXIT_CODE = 0
SYSTEM_EXIT_CODE = 1
VALIDATION_EXIT_CODE = 2
REMOTE_EXIT_CODE = 3
NOT_FOUND_EXIT_CODE = 4

EXIT_CODE_BY_KIND = {
    FailureKind.MISSING_INPUT: VALIDATION_EXIT_CODE,
    FailureKind.REMOTE_FETCH_FAILURE: REMOTE_EXIT_CODE,
    FailureKind.NOT_FOUND: NOT_FOUND_EXIT_CODE,
    FailureKind.INTERNAL_FAILURE: SYSTEM_EXIT_CODE,
}
