#!/usr/bin/env python3

import aws_cdk as cdk

from aeroflow_stack import AeroFlowStack

app = cdk.App()
AeroFlowStack(
    app,
    "AeroFlowStack",
)

app.synth()
