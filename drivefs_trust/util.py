# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

import hashlib
from os import remove
from os.path import exists
from subprocess import Popen, PIPE

BLOCK_SIZE = 65536


def system_call(cmd):
    """Call command and return (stdout, stderr, return_value)

    Parameters
    ----------
    cmd : str or iterator of str
        The string containing the command to be run, or a sequence of strings
        that are the tokens of the command. A string is run through the
        shell, a sequence is executed directly

    Returns
    -------
    str, str, int
        - The standard output of the command
        - The standard error of the command
        - The exit status of the command

    Notes
    -----
    A command that can't be found returns 127 like the shell does, instead
    of raising.
    """
    shell = isinstance(cmd, str)
    try:
        proc = Popen(cmd, universal_newlines=True, shell=shell, stdout=PIPE,
                     stderr=PIPE)
    except FileNotFoundError as e:
        return "", str(e), 127
    # Communicate pulls all stdout/stderr from the PIPEs
    # This call blocks until the command is done
    stdout, stderr = proc.communicate()
    return_value = proc.returncode
    return stdout, stderr, return_value


def file_digest(fp):
    """SHA-256 hex digest of the exact bytes of a file

    Parameters
    ----------
    fp : str
        The file

    Returns
    -------
    str
        The hex digest

    Raises
    ------
    OSError
        If the file can't be read
    """
    sha = hashlib.sha256()
    with open(fp, 'rb') as f:
        for block in iter(lambda: f.read(BLOCK_SIZE), b''):
            sha.update(block)
    return sha.hexdigest()


def remove_if_exists(fp):
    if exists(fp):
        remove(fp)
