import json

import pytest


@pytest.fixture
def hello_world():
    return {
        "Comment": "A Hello World example using Pass states",
        "StartAt": "Hello",
        "States": {
            "Hello": {"Type": "Pass", "Result": "Hello", "Next": "World"},
            "World": {"Type": "Pass", "Result": "World", "End": True},
        },
    }


@pytest.fixture
def order_workflow():
    return {
        "StartAt": "CheckInventory",
        "States": {
            "CheckInventory": {
                "Type": "Task",
                "Resource": "inventory.check",
                "Next": "InStock?",
            },
            "InStock?": {
                "Type": "Choice",
                "Choices": [
                    {"Variable": "$.inStock", "BooleanEquals": True, "Next": "Fulfil"},
                ],
                "Default": "OutOfStock",
            },
            "Fulfil": {
                "Type": "Parallel",
                "Branches": [
                    {
                        "StartAt": "Ship",
                        "States": {"Ship": {"Type": "Task", "Resource": "ship", "End": True}},
                    },
                    {
                        "StartAt": "Bill",
                        "States": {"Bill": {"Type": "Task", "Resource": "bill", "End": True}},
                    },
                ],
                "Next": "NotifyAll",
            },
            "NotifyAll": {
                "Type": "Map",
                "ItemsPath": "$.recipients",
                "Iterator": {
                    "StartAt": "Notify",
                    "States": {"Notify": {"Type": "Task", "Resource": "notify", "End": True}},
                },
                "Next": "Done",
            },
            "OutOfStock": {"Type": "Fail", "Error": "OutOfStock"},
            "Done": {"Type": "Succeed"},
        },
    }


@pytest.fixture
def as_text():
    def dump(definition) -> str:
        return json.dumps(definition, indent=2)
    return dump
