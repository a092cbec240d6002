# Message templates keyed by message id. Unknown ids render as the id itself.
MESSAGES = {
    "check.run.success": "Completion accepted (score: {score}).",
    "check.run.fail": "Completion rejected (score: {score}).",
    "check.issue.not_complete": "Some annotation sites are still holes or missing.",
    "check.issue.changed_code": "The completion changed code other than type annotations.",
    "check.issue.changed_comments": "The completion added or removed comments.",
    "check.issue.changed_comments_allowed": "Comments changed; ignored as requested.",
    "usages.none": "No usages of the introduced name were found.",
    "usages.found": "Found {count} usage(s) of '{name}'.",
    "file.read_error": "Could not read {path}: {error}",
    "file.parse_error": "Could not parse {path}: {error}",
    "config.error": "Invalid configuration: {error}",
}
