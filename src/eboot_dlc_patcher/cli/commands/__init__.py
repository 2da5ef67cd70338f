# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""CLI operation modules.

Each module exposes ``OPERATION`` (its ``OperationSpec`` table row),
``COMPLETERS`` (option name -> argcomplete completer) and
``dispatch(invocation, backend) -> bool`` to handle a parsed invocation.
The dispatch function returns ``True`` if it handled the operation,
``False`` otherwise.
"""
