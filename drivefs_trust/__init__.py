# -----------------------------------------------------------------------------
# Copyright (c) 2025--, The drivefs_trust Development Team.
#
# Distributed under the terms of the BSD 3-clause License.
#
# The full license is in the file LICENSE, distributed with this software.
# -----------------------------------------------------------------------------

import logging
from os import environ

handler = logging.StreamHandler()
fmt_str = '%(asctime)s %(name)-12s %(levelname)-8s %(message)s'
handler.setFormatter(logging.Formatter(fmt_str))
logger = logging.getLogger(__name__)
logger.addHandler(handler)

debug_levels_list = {'DEBUG': logging.DEBUG,
                     'INFO': logging.INFO,
                     'WARNING': logging.WARNING,
                     'ERROR': logging.ERROR,
                     'CRITICAL': logging.CRITICAL}

# DRIVEFS_TRUST_DEBUG_LEVEL only controls the diagnostic logger. Operator
# facing status lines go through drivefs_trust.notify.Notifier
if 'DRIVEFS_TRUST_DEBUG_LEVEL' in environ:
    level = environ['DRIVEFS_TRUST_DEBUG_LEVEL']
    if level in debug_levels_list:
        logger.setLevel(debug_levels_list[level])
    else:
        raise ValueError(
            "%s is not a valid value for DRIVEFS_TRUST_DEBUG_LEVEL" % level)
    logger.debug('logging set to %s' % level)
else:
    logger.setLevel(logging.CRITICAL)
    logger.debug('logging set to CRITICAL')

from .exceptions import (DriveTrustError, ValidationError,  # noqa: E402
                         RequirementError, FetchError, TrustStoreError,
                         RelaunchError)
from .config import TrustConfig, load_config, generate_config  # noqa: E402
from .notify import Notifier, ConsoleSink, FileSink  # noqa: E402
from .fetcher import CertificateFetcher, CertificateSource  # noqa: E402
from .drivefs import DefaultsTrustStore, ProcessController  # noqa: E402
from .reconciler import BundleReconciler, Outcome, reconcile  # noqa: E402

__version__ = '1.5.0'

__all__ = ["DriveTrustError", "ValidationError", "RequirementError",
           "FetchError", "TrustStoreError", "RelaunchError", "TrustConfig",
           "load_config", "generate_config", "Notifier", "ConsoleSink",
           "FileSink", "CertificateFetcher", "CertificateSource",
           "DefaultsTrustStore", "ProcessController", "BundleReconciler",
           "Outcome", "reconcile"]
