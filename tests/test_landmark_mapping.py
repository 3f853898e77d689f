import pytest

from utils.data_structures import Landmark, PoseLandmarks
from utils.exceptions import InputError
from utils.landmark_mapping import map_keypoints, map_views


def mediapipe_keypoints(visibility=0.9):
    return [{"x": i / 100, "y": i / 50, "z": 0.0, "visibility": visibility} for i in range(33)]


def coco_keypoints():
    # 像素坐标 + 置信度
    return [[10.0 * i, 20.0 * i, 0.8] for i in range(17)]


class TestMapKeypoints:
    def test_mediapipe_indices(self):
        view = map_keypoints(mediapipe_keypoints())

        assert view.nose == Landmark(x=0.0, y=0.0, z=0.0, visibility=0.9)
        assert view.left_eye.x == pytest.approx(0.02)
        assert view.right_eye.x == pytest.approx(0.05)
        assert view.left_shoulder.x == pytest.approx(0.11)
        assert view.right_hip.x == pytest.approx(0.24)
        assert view.right_heel.x == pytest.approx(0.30)
        assert view.c7 is None
        assert view.l5 is None

    def test_coco_indices(self):
        view = map_keypoints(coco_keypoints(), keypoint_format="coco")

        assert view.left_shoulder == Landmark(x=50.0, y=100.0, visibility=0.8)
        assert view.right_ankle.x == pytest.approx(160.0)
        assert view.left_heel is None

    def test_image_size_normalizes(self):
        view = map_keypoints(coco_keypoints(), keypoint_format="coco", image_size=(200, 400))

        assert view.left_hip.x == pytest.approx(110.0 / 200)
        assert view.left_hip.y == pytest.approx(220.0 / 400)
        assert view.left_hip.visibility == pytest.approx(0.8)

    def test_min_visibility_drops_points(self):
        keypoints = mediapipe_keypoints()
        keypoints[11] = {"x": 0.4, "y": 0.45, "visibility": 0.1}

        view = map_keypoints(keypoints, min_visibility=0.5)

        assert view.left_shoulder is None
        assert view.right_shoulder is not None

    def test_points_without_visibility_are_kept(self):
        keypoints = [[0.5, 0.5] for _ in range(17)]
        view = map_keypoints(keypoints, keypoint_format="coco", min_visibility=0.5)
        assert len(view.present_sites()) == 17

    def test_missing_keypoint_is_skipped(self):
        keypoints = mediapipe_keypoints()
        keypoints[0] = None
        assert map_keypoints(keypoints).nose is None

    @pytest.mark.parametrize("keypoint, expected", [
        ([0.1, 0.2], Landmark(x=0.1, y=0.2)),
        ((0.1, 0.2, 0.7), Landmark(x=0.1, y=0.2, visibility=0.7)),
        ([0.1, 0.2, -0.3, 0.7], Landmark(x=0.1, y=0.2, z=-0.3, visibility=0.7)),
        ({"x": 0.1, "y": 0.2, "score": 0.7}, Landmark(x=0.1, y=0.2, visibility=0.7)),
        (Landmark(x=0.1, y=0.2), Landmark(x=0.1, y=0.2)),
    ])
    def test_keypoint_forms(self, keypoint, expected):
        keypoints = [[0.5, 0.5]] * 17
        keypoints[0] = keypoint
        assert map_keypoints(keypoints, keypoint_format="coco").nose == expected

    def test_unknown_format(self):
        with pytest.raises(InputError):
            map_keypoints(mediapipe_keypoints(), keypoint_format="openpose")

    def test_too_few_keypoints(self):
        with pytest.raises(InputError):
            map_keypoints(mediapipe_keypoints()[:17])

    @pytest.mark.parametrize("keypoint", [{"x": 0.1}, [0.1], "ab", "12", b"12", 0.5, [0.1, 0.2, 0.3, 0.4, 0.5]])
    def test_malformed_keypoint(self, keypoint):
        keypoints = [[0.5, 0.5]] * 17
        keypoints[0] = keypoint
        with pytest.raises(InputError):
            map_keypoints(keypoints, keypoint_format="coco")

    def test_invalid_image_size(self):
        with pytest.raises(InputError):
            map_keypoints(coco_keypoints(), keypoint_format="coco", image_size=(0, 480))


class TestMapViews:
    def test_maps_present_views(self):
        posture_input = map_views({"front": mediapipe_keypoints(), "back": None})

        assert posture_input.present_views() == ("front",)
        assert posture_input.front.left_knee.x == pytest.approx(0.25)

    def test_unknown_view(self):
        with pytest.raises(InputError):
            map_views({"top": mediapipe_keypoints()})


class TestPoseLandmarksFromDict:
    def test_unknown_site(self):
        with pytest.raises(InputError):
            PoseLandmarks.from_dict({"left_toe": {"x": 0.1, "y": 0.2}})

    def test_malformed_landmark(self):
        with pytest.raises(InputError):
            PoseLandmarks.from_dict({"left_hip": {"x": 0.1}})
