from users.models import role_for


def user_role(request):
    if not request.user.is_authenticated:
        return {'user_role': None, 'is_admin_user': False}

    role = role_for(request.user)
    return {'user_role': role, 'is_admin_user': role == 'admin'}
