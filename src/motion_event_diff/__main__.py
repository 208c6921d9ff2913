# PROV: MOTIONDIFF.MAIN.01
# WHY: Allow `python -m motion_event_diff ...` as a stable entrypoint for the CLI.

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
