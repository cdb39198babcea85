from app.core.errors import flatten_validation_errors


def test_flatten_validation_errors_groups_by_field():
    errors = [
        {"loc": ("body", "budget"), "msg": "Input should be greater than 0"},
        {"loc": ("body", "budget"), "msg": "Input should be a valid integer"},
        {"loc": ("query", "userId"), "msg": "Field required"},
        {"loc": ("body",), "msg": "Value error, endDate must be on or after startDate."},
    ]

    assert flatten_validation_errors(errors) == {
        "formErrors": ["Value error, endDate must be on or after startDate."],
        "fieldErrors": {
            "budget": ["Input should be greater than 0", "Input should be a valid integer"],
            "userId": ["Field required"],
        },
    }
