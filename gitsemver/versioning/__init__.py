"""
Versioning module for gitsemver.

All logic that turns repository state into a semantic version lives in this
package.

LAYERS:
=======

1. **Core version logic** (version.py):
   - SemanticVersion: parsing with a tag prefix, comparison and increments

2. **Candidates** (base_version.py):
   - BaseVersion: an immutable proposal with provenance and anchor commit

3. **Context** (context.py, branch_config.py):
   - VersionContext: per-run snapshot of branch, commit and configuration
   - EffectiveConfiguration: the branch configuration after ``inherit`` resolution

4. **Strategies** (strategies/):
   - ConfiguredNextVersion, MergeMessage, TaggedCommit,
     TrackReleaseBranches and VersionInBranchName, in that priority order

5. **Selection** (selection.py, engine.py):
   - VersionStrategyEngine runs the enabled strategies and picks the greatest
     post-increment candidate, or reports that there is none

6. **Calculation** (calculator.py):
   - NextVersionCalculator applies the fallback policy and pre-release tag

Only the leaf modules are re-exported here; import the engine and calculator
from their modules, since they depend on the configuration model which in
turn depends on this package's version module.
"""

from .base_version import BaseVersion
from .exceptions import (
    ConfigurationError,
    NoBaseVersionError,
    RepositoryError,
    VersionFormatError,
    VersioningError,
)
from .version import SemanticVersion, VersionField, increment_version, parse_version

__all__ = [
    "BaseVersion",
    "SemanticVersion",
    "VersionField",
    "increment_version",
    "parse_version",
    "VersioningError",
    "VersionFormatError",
    "ConfigurationError",
    "RepositoryError",
    "NoBaseVersionError",
]
