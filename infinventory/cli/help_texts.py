# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/cli/help_texts.py
from __future__ import annotations

# Pure help text for the argparse epilog; no imports beyond __future__.

YAML_EXAMPLE = r"""# infinventory configuration example (YAML)
#
# Run:
#   infinventory --config inventory.yaml
#
# Merge multiple configs (later overrides earlier):
#   infinventory --config base.yaml --config site.yaml /srv/drivers
#
# Keys are the long option names (dashes or underscores both work).
# Anything given on the command line overrides the config.
#
# path: /srv/drivers            # driver folder (or give it as the first argument)
# list_pnp_ids: true            # include every hardware ID in the report
# format: csv                   # table | json | csv | yaml
# output: ./drivers.csv         # default: stdout
# workers: 4                    # default: $INFINVENTORY_WORKERS, else min(4, cpus)
# signing: auto                 # auto | none | osslsigncode
# signing_timeout: 30
# capture_comments: false
# verbose: 1
# log_file: ./infinventory.log
#
# Extra device setup classes (GUID -> class name), used before [Version] Class:
# class_names:
#   "{a0a701c0-a511-42ff-aa6c-06dc0395576f}": "MyVendorClass"
"""

FEATURE_SUMMARY = r"""
  - Recursive .inf discovery, parallel resolution (threads)
  - %token% resolution through [Strings]
  - Platform decorations -> architectures (x64/x86) and OS tags
  - Signing check through osslsigncode when installed
  - Per-folder content hash for deduplication against other inventories
  - Output: rich table, JSON, CSV, YAML
"""

EXIT_CODES = r"""
  0    success
  1    unexpected error
  2    bad arguments / driver folder not found
  3    no .inf files found
  130  interrupted
"""
