#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys

from pyintinfo.cli import main

sys.exit(main())
