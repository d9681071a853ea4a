from django import forms
from django.contrib.auth.models import User

from users.serializers import MIN_PASSWORD_LENGTH


class LoginForm(forms.Form):
    email = forms.EmailField(widget=forms.EmailInput(attrs={
        'class': 'form-control',
        'placeholder': 'you@example.com',
        'autofocus': True,
    }))
    password = forms.CharField(widget=forms.PasswordInput(attrs={'class': 'form-control'}))

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()


class RegistrationForm(forms.Form):
    email = forms.EmailField(widget=forms.EmailInput(attrs={'class': 'form-control'}))
    password = forms.CharField(
        min_length=MIN_PASSWORD_LENGTH,
        widget=forms.PasswordInput(attrs={'class': 'form-control'}),
        help_text=f'At least {MIN_PASSWORD_LENGTH} characters',
    )

    def clean_email(self):
        email = self.cleaned_data['email'].strip().lower()
        if User.objects.filter(username__iexact=email).exists():
            raise forms.ValidationError('An account with this email already exists')
        return email

    def save(self):
        email = self.cleaned_data['email']
        # Email doubles as the username so the default auth backend can log in with it
        return User.objects.create_user(
            username=email,
            email=email,
            password=self.cleaned_data['password'],
        )
