from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    # trim_whitespace stays off for the password: it is compared exactly.
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(max_length=256, trim_whitespace=False)

    def validate_username(self, v):
        v = (v or '').strip().lower()
        if not v:
            raise serializers.ValidationError('Username is required')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v
