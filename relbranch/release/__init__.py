"""Release workflow.

- version, branches, policy: pure version and branch rules
- record, config: persisted state and settings
- guard, hook, prompt: preconditions and pluggable collaborators
- workflow, multi: orchestration for one or many repositories
"""

from __future__ import annotations
