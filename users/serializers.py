from django.contrib.auth.models import User
from rest_framework import serializers

from .models import Profile, role_for

MIN_PASSWORD_LENGTH = 6


class UserSerializer(serializers.ModelSerializer):
    """Users as seen by the admin API: email is the login name."""

    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=Profile.ROLE_CHOICES, required=False)
    password = serializers.CharField(
        write_only=True,
        required=False,
        min_length=MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'},
    )

    class Meta:
        model = User
        fields = ['id', 'email', 'role', 'password', 'is_active', 'date_joined', 'last_login']
        read_only_fields = ['id', 'date_joined', 'last_login']

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['role'] = role_for(instance)
        return data

    def validate_email(self, value):
        value = value.strip().lower()
        existing = User.objects.filter(username__iexact=value)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError('A user with this email already exists')
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get('password'):
            raise serializers.ValidationError({'password': 'Password is required'})
        return attrs

    def create(self, validated_data):
        role = validated_data.pop('role', Profile.ROLE_USER)
        password = validated_data.pop('password')
        email = validated_data.pop('email')
        user = User.objects.create_user(username=email, email=email, password=password, **validated_data)
        user.profile.role = role
        user.profile.save()
        return user

    def update(self, instance, validated_data):
        role = validated_data.pop('role', None)
        password = validated_data.pop('password', None)
        email = validated_data.pop('email', None)

        if email:
            instance.email = email
            instance.username = email
        if password:
            instance.set_password(password)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()

        if role:
            try:
                profile = instance.profile
            except Profile.DoesNotExist:
                profile = Profile(user=instance)
            profile.role = role
            profile.save()
        return instance
