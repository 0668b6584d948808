from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    class Meta:
        extra_kwargs = {
            "id": {"read_only": True},
            "created_at": {"read_only": True},
            "updated_at": {"read_only": True},
        }


class StoredFileSerializer(serializers.Serializer):
    """A file kept in object storage: public url plus the id used to destroy it."""

    url = serializers.CharField()
    storage_id = serializers.CharField()


class UserSummarySerializer(serializers.Serializer):
    """Joined user reference exposed on websites and sales."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()
