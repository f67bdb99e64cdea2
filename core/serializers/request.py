from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rest_framework import serializers


class AssignmentSerializer(serializers.Serializer):
    assignDate = serializers.CharField(source='assign_date')
    assignedTo = serializers.CharField(source='assigned_to')
    grouping = serializers.CharField(required=False, allow_null=True)


class RecommendationSerializer(serializers.Serializer):
    recommendationValue = serializers.CharField(source='value')
    recommendationDescription = serializers.CharField(source='description')


class InboxRequestSerializer(serializers.Serializer):
    """Wire shape of an inbox request (read only)."""
    type = serializers.CharField()
    id = serializers.CharField()
    status = serializers.CharField()
    isRead = serializers.BooleanField(source='is_read')
    patientName = serializers.CharField(source='patient_name')
    requestDate = serializers.CharField(source='request_date')
    lastModifiedDate = serializers.CharField(source='last_modified_date')
    description = serializers.CharField()
    estimatedTimeSec = serializers.IntegerField(source='estimated_time_sec', min_value=0)
    assignment = AssignmentSerializer()
    isUrgent = serializers.BooleanField(source='is_urgent')
    labels = serializers.ListField(child=serializers.CharField(), required=False)
    panels = serializers.ListField(child=serializers.CharField(), required=False)
    abnormalResults = serializers.ListField(source='abnormal_results', child=serializers.CharField(), required=False)
    prescriptionIds = serializers.ListField(source='prescription_ids', child=serializers.CharField(), required=False)
    recommendation = RecommendationSerializer(required=False, allow_null=True)

    def to_representation(self, instance):
        # the request's own to_dict() drops empty optionals the way the API always has
        return instance.to_dict()


class DerivedViewSerializer(serializers.Serializer):
    typeIcon = serializers.CharField()
    typeClass = serializers.CharField()
    categoryLabel = serializers.CharField()
    categoryClass = serializers.CharField()
    priorityClass = serializers.CharField()
    priorityBadgeClass = serializers.CharField(allow_blank=True)
    priorityLabel = serializers.CharField(allow_blank=True)
    hasAlerts = serializers.BooleanField()
    formattedTimestamp = serializers.CharField()
    relativeTime = serializers.CharField()
    timeAgeClass = serializers.CharField()
    estimatedTime = serializers.CharField()
    doctorInitials = serializers.CharField()
    panelsDisplay = serializers.CharField(allow_blank=True)
    panelsCount = serializers.IntegerField()
    panelsLabel = serializers.CharField()
    abnormalResultsDisplay = serializers.CharField(allow_blank=True)
    labelsDisplay = serializers.CharField(allow_blank=True)
    readClass = serializers.CharField(allow_blank=True)

    def to_representation(self, instance):
        return instance.to_dict()


class InboxRowSerializer(InboxRequestSerializer):
    view = DerivedViewSerializer(read_only=True)

    def to_representation(self, instance):
        request, view = instance
        return {**request.to_dict(), 'view': view.to_dict()}


class InboxQuerySerializer(serializers.Serializer):
    # IANA zone for formattedTimestamp, e.g. "Europe/Paris"; defaults to TIME_ZONE
    tz = serializers.CharField(max_length=64, required=False)

    def validate_tz(self, v):
        try:
            return ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError):
            raise serializers.ValidationError('unknown time zone')
