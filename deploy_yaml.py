#!/usr/bin/env python3
"""
YAML Deployer entry point.

Creates or updates the Deployment and Service found in a YAML file
(./configuration.yaml by default) and prints the service URL.
"""

import sys
from yaml_deployer.libs.main_app import main


if __name__ == "__main__":
    sys.exit(main())
