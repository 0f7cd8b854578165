from marshmallow import Schema, fields, validate, post_load


class UserRegistrationSchema(Schema):
    username = fields.Str(
        required=True,
        validate=[
            validate.Length(min=3, max=80, error="Username must be between 3 and 80 characters"),
            validate.Regexp(
                r'^[a-zA-Z0-9_]+$',
                error="Username can only contain letters, numbers, and underscores"
            )
        ]
    )

    email = fields.Email(
        required=True,
        validate=validate.Length(max=120, error="Email must be less than 120 characters")
    )

    password = fields.Str(
        required=True,
        validate=[
            validate.Length(min=8, error="Password must be at least 8 characters"),
        ]
    )

    @post_load
    def clean_data(self, data, **kwargs):
        """Clean and normalize data after validation"""
        for key, value in data.items():
            if isinstance(value, str) and key != 'password':
                data[key] = value.strip()

        # Lowercase email
        if 'email' in data:
            data['email'] = data['email'].lower()

        return data


class UserLoginSchema(Schema):
    email = fields.Email(
        required=True,
        validate=validate.Email(error="Invalid email address")
    )

    password = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Password is required")
    )

    @post_load
    def clean_data(self, data, **kwargs):
        data['email'] = data['email'].strip().lower()
        return data
