#
# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Pose library used for pose variations: 10 poses per gender and shot type.
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel


class Pose(BaseModel):
    id: str
    description: str


def _poses(entries: List[Tuple[str, str]]) -> List[Pose]:
    return [Pose(id=pose_id, description=description) for pose_id, description in entries]


FEMALE_FULL_BODY_POSES = _poses([
    ("01_FEMALE_FULL_Straight_Profile",
     "Side profile shot from hip height. Standing strictly upright in a neutral pose. Arms hanging vertically by the sides, fingers relaxed. Legs straight and feet together. Head facing directly forward, chin parallel to the ground. No movement."),
    ("02_FEMALE_FULL_Walking_Look_Back",
     "Rear 3/4 view from eye level. Subtle walking motion away from camera. Left leg crossing over right leg. Left hand resting firmly on the left hip. Torso twisted slightly to the right. Head turned back over the left shoulder to look at the viewer."),
    ("03_FEMALE_FULL_Hand_on_Head",
     "Frontal shot from chest height. Standing relaxed. Weight shifted to the right hip (contrapposto). Left elbow bent upwards, hand resting lightly on top of the head. Right arm hanging loose. Head tilted 15 degrees to the left."),
    ("04_FEMALE_FULL_Looking_Down",
     "Frontal shot from low angle. Standing with feet wide apart (shoulder-width). Left hand tucked into the waistband. Right arm hanging straight down. Shoulders rounded forward slightly. Head tilted down, chin tucked towards chest, looking at the floor."),
    ("05_FEMALE_FULL_Leaning_Forward",
     "Frontal 3/4 view from eye level. Leaning forward at the waist about 20 degrees. Both hands clasped together between the upper thighs. Shoulders hunched forward naturally. Knees slightly bent. Head angled down."),
    ("06_FEMALE_FULL_Legs_Crossed",
     "Frontal shot from knee height. Standing static. Legs crossed at the shins (Right leg in front of left). Both hands clasped loosely at the lower waist. Weight balanced on the back foot. Head turned 45 degrees to the right."),
    ("07_FEMALE_FULL_Deep_Squat",
     "Low angle frontal shot. Deep crouching position. Knees bent fully. Right knee positioned higher than left. Right elbow resting on right knee, hand supporting the chin. Left arm straight, fingers touching the floor for balance."),
    ("08_FEMALE_FULL_Hands_on_Thighs",
     "Frontal shot from eye level. Leaning torso forward 45 degrees from hips. Both palms resting on the mid-thighs. Arms fully extended to support weight. Legs straight. Neck extended, looking directly at the camera."),
    ("09_FEMALE_FULL_Profile_Eye_Contact",
     "Side profile shot (facing left). Standing straight. Left leg stepped forward slightly. Left hand hidden in pocket. Torso remains in profile, but head is turned 90 degrees to face the camera lens directly."),
    ("10_FEMALE_FULL_Power_Stance",
     "Frontal 3/4 view from low angle. Confident standing pose. Right leg stepped forward aggressively. Right hand inside trouser pocket. Left arm relaxed by side. Spine straight. Head facing forward."),
])

FEMALE_CLOSE_UP_POSES = _poses([
    ("11_FEMALE_CLOSE_Dangling_Arch",
     "Side profile close-up (waist to floor). One foot planted, the other suspended in air. The lifted foot has a high arch with toes pointed downwards (plantar flexion). Detailed ankle bone structure visible."),
    ("12_FEMALE_CLOSE_One_Leg_Lifted",
     "Front view close-up (thigh to floor). Standing on one straight leg. The other leg is bent at the knee 90 degrees, lifting the foot behind the standing leg. Knees are close together."),
    ("13_FEMALE_CLOSE_Walking_Stride",
     "Ground-level low angle close-up. Walking motion. Front foot flat on ground. Back foot heel lifted 45 degrees, weight pressing on the ball of the foot (push-off phase). Ankle tendons visible."),
    ("14_FEMALE_CLOSE_Tiptoe_Stance",
     "Rear view close-up (calves to floor). Standing on tiptoes (releve). Both heels raised high off the ground. Feet parallel and slightly apart. Calf muscles engaged."),
    ("15_FEMALE_CLOSE_Deep_Squat_Side",
     "Side profile close-up. Deep squat position. Hamstrings pressed tight against calves. Knees fully bent. Feet flat on the floor. Center of gravity low."),
    ("16_FEMALE_CLOSE_Squat_Front",
     "Front view close-up (knees to floor). Crouching posture. Knees bent deeply and angled outwards 45 degrees. Heels slightly lifted off the ground. Weight distinct on the balls of feet."),
    ("17_FEMALE_CLOSE_Dynamic_Step",
     "Side profile close-up. Mid-stride snapshot. Front leg extended straight, heel striking the ground first. Toes of the front foot pulled up (dorsiflexion)."),
    ("18_FEMALE_CLOSE_Static_Standing",
     "Low angle close-up (ground level). Single leg weight-bearing. Foot planted firmly flat. Ankle joint at a strict 90-degree angle. Vertical shin alignment."),
    ("19_FEMALE_CLOSE_Crossed_Walk",
     "Front 3/4 view close-up. Walking motion where one leg crosses in front of the other (catwalk style). Front foot flat, rear foot obscured or heel lifted."),
    ("20_FEMALE_CLOSE_Relaxed_Stance",
     "Side view close-up. Static standing. Feet shoulder-width apart. Weight slightly shifted to the heels. Ankles relaxed, not locked. Natural standing posture."),
])

MALE_FULL_BODY_POSES = _poses([
    ("21_MALE_FULL_Pockets_Down",
     "Frontal shot from chest height. Standing with a slouch. Shoulders rolled forward. Head tilted down, chin almost touching chest. Both hands deeply buried in pockets. Legs straight but relaxed."),
    ("22_MALE_FULL_Pockets_Up",
     "Frontal shot from low angle. Standing tall with a slight backward lean. Head tilted upwards 20 degrees (chin up). Both hands in pockets with elbows pointed outwards. Feet shoulder-width apart."),
    ("23_MALE_FULL_Mid_Stride_Walk",
     "Frontal shot from knee height. Walking towards camera. Right leg leading with foot planted. Left leg pushing off behind with heel lifted. Torso upright, arms swinging naturally."),
    ("24_MALE_FULL_Profile_Looking_Down",
     "Side profile shot (facing left). Standing completely still. Head tilted down, gaze fixed on the chest/waist area. Shoulders slightly rounded. Hands clasped loosely in front of the hips."),
    ("25_MALE_FULL_Rigid_Stance",
     "Frontal shot from eye level. Rigid, military-style standing. Spine perfectly perpendicular to the floor. Arms hanging straight and stiff by sides. Feet firmly planted shoulder-width apart. Face neutral."),
    ("26_MALE_FULL_Relaxed_One_Pocket",
     "Frontal shot from eye level. Casual standing. Weight shifted entirely to the left leg. Right knee slightly bent and relaxed. Left hand in pocket. Right arm hanging loose."),
    ("27_MALE_FULL_Leaning_Cross_Legged",
     "Frontal shot from chest height. Leaning back against a wall (implied). Legs crossed at the ankles (Right over Left). Both hands in trouser pockets. Shoulders relaxed and back against the surface."),
    ("28_MALE_FULL_Profile_Step",
     "Side profile shot (facing left). Mid-stride walking motion. Left leg stepping forward with a long stride, heel touching ground. Right leg trailing behind. Left hand in pocket."),
    ("29_MALE_FULL_Thinking_Stance",
     "Frontal shot from eye level. Wide stance. Right hand raised touching the chin (thinking gesture), elbow tucked near ribs. Left hand in pocket. Head neutral."),
    ("30_MALE_FULL_Profile_Look_at_Camera",
     "Side profile shot (facing right). Body is strictly sideways. Feet planted. Head turned 90 degrees to the right to look directly into the camera lens. Shoulders remain in profile."),
])

MALE_CLOSE_UP_POSES = _poses([
    ("31_MALE_CLOSE_Walking_Heel_Up",
     "Low angle close-up (ground level). Walking motion. The rear foot's heel is lifted high (70 degrees), weight focused on the big toe. Front foot flat. Trouser hem breaks over the shoe."),
    ("32_MALE_CLOSE_Static_Feet_Apart",
     "Low angle close-up. Standing still. Feet positioned parallel, shoulder-width apart. Weight distributed evenly on both soles. Ankles vertical and stable."),
    ("33_MALE_CLOSE_Ankle_Flex",
     "Extreme close-up (shin to foot). Foot lifted in mid-air. Ankle flexed tightly upwards (dorsiflexion) to 90 degrees. Toes pointing down. Shin muscle defined."),
    ("34_MALE_CLOSE_Step_Forward",
     "Side view close-up. Walking stride. Front leg straight, landing firmly on the heel. The sole of the shoe makes a 30-degree angle with the floor."),
    ("35_MALE_CLOSE_Foot_Cross",
     "Front view close-up. Static standing. Ankles crossed tightly (Right foot planted in front of Left). Weight distributed on both feet. Feet parallel to the camera."),
    ("36_MALE_CLOSE_Wide_Stance_Down",
     "High angle (top-down) close-up. Very wide stance. Feet angled slightly outwards. Knees locked straight. Planted firmly."),
    ("37_MALE_CLOSE_Single_Foot_Arch",
     "Side profile close-up. One foot resting with only the toes touching the ground, heel lifted. The arch of the foot is slightly curved. Other foot flat."),
    ("38_MALE_CLOSE_Walk_Mid_Stride",
     "Frontal view close-up. Walking towards camera. Right foot flat and weight-bearing. Left foot in the background, heel raised, in the passing phase of a step."),
    ("39_MALE_CLOSE_Profile_Flat_Stand",
     "Side profile close-up. Static standing. Entire sole of the foot is flat on the ground. Ankle at 90 degrees. Weight centered on the heel."),
    ("40_MALE_CLOSE_Inner_Feet_Angle",
     "Low angle close-up. Relaxed standing. Feet turned slightly inwards (pigeon-toed). Knees slightly bent/soft. Weight rolling slightly to the outer edges of the shoes."),
])

POSE_LIBRARY: Dict[Tuple[str, str], List[Pose]] = {
    ("FEMALE", "full"): FEMALE_FULL_BODY_POSES,
    ("FEMALE", "closeup"): FEMALE_CLOSE_UP_POSES,
    ("MALE", "full"): MALE_FULL_BODY_POSES,
    ("MALE", "closeup"): MALE_CLOSE_UP_POSES,
}
