# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------


class DriveTrustError(Exception):
    """Base class for all drivefs_trust errors"""
    pass


class ValidationError(DriveTrustError):
    """The configuration still holds placeholder or missing values"""
    pass


class RequirementError(DriveTrustError):
    """A required tool or the target application is not available"""
    pass


class FetchError(DriveTrustError):
    """A certificate source could not be downloaded

    Parameters
    ----------
    source : str
        Human readable name of the source that failed
    reason : str
        What went wrong
    """
    def __init__(self, source, reason):
        self.source = source
        self.reason = reason
        super(FetchError, self).__init__(
            "Failed to download %s: %s" % (source, reason))


class TrustStoreError(DriveTrustError):
    """The application's trust setting could not be written"""
    pass


class RelaunchError(DriveTrustError):
    """The target application could not be started again"""
    pass
