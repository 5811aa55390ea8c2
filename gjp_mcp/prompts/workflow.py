"""Defines the prompts describing the gjp packaging workflow."""

WORKFLOW_PROMPT = """You are packaging a Java project with gjp.
A gjp project is a directory with a `src/` subtree (one directory per package), a `kit/` subtree (build tools and libraries) and a git repository. Every step is recorded as a tagged git snapshot.

Work in phases, using the `gjp_*` tools:

1.  Gathering (`gjp_gather`):
    - Download or copy upstream sources into `src/<package>/` and the binaries needed to build them into `kit/`.
    - Call `gjp_finish` when done. The new files are listed in `file_lists/<package>_input` and `file_lists/kit`.

2.  Dry-running (`gjp_dry_run`):
    - Run the build as it would run in the packaging environment. Anything it downloads into `kit/` is kept.
    - Call `gjp_finish` when done. Files produced in `src/` are listed in `file_lists/<package>_output`, then `src/` is restored to its state before the dry-run.

Notes:
- Starting one phase while the other is active finishes the active one first.
- Starting a phase that is already active changes nothing.
- Never run two gjp operations on the same project at the same time.
- Use `gjp_status` to see the active phase and how many phases were completed.
"""


def get_prompts() -> dict[str, str]:
    """
    Returns a dictionary of available prompt components.
    """
    return {
        "gjp-workflow": WORKFLOW_PROMPT,
    }
