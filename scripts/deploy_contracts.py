#!/usr/bin/env python3
"""
Contract Deployment Script
Deploys the Beacon deposit contract, Multicall2 and BalanceChecker to the
network named by DEPLOY_NETWORK
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from deployer.deployment import run

if __name__ == "__main__":
    sys.exit(run())
