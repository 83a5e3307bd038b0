"""
pulpcli command actions.

Every module exposes action(project, options): `project` is the located Project
(None for commands that do not need one) and `options` the resolved, read-only
option mapping, with the forwarded tokens under "remainder". Failures raise
CommandError.
"""
